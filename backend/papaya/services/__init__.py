"""
Services Layer

Business logic services that:
- Accept domain inputs (session, Caller, IDs, plain data)
- Return domain outputs (models, summaries)
- Raise papaya.errors exceptions, never HTTP exceptions
- Do NOT depend on HTTP request/response objects
"""
