"""Domain layer (pure logic).

- Keep game rules and calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Prefer deterministic functions (time/date passed in as arguments).
"""
