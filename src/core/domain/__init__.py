"""Domain types for the HTTPS request pipeline.

What lives here:
- Pure data structures (Endpoint, payload variants, request/response units).
- The error taxonomy and the shared media-type constants.
- Nothing here knows about httpx, the CLI or configuration.
"""
