"""
Services Layer

Business rules shared by the route modules:
- Accept a Session plus domain inputs (ids, the calling Actor, field values)
- Raise CommunityError subclasses for expected failures
- Do NOT depend on HTTP request/response objects
"""
