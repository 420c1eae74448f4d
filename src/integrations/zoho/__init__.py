"""
Zoho Creator integration.

- token_cache: OAuth refresh-grant access token, cached in memory
- field_mapper: form payload -> Zoho record (pure)
- records / uploads / reports: authenticated Creator API calls
"""
