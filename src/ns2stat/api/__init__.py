"""API module for ns2stat.

- Validates query parameters, reads games from the store
- Returns Stats, time series and team suggestions as JSON
- Forbidden: file ingestion during requests, aggregation logic
"""
