"""
Service layer abstraction.

Each service encapsulates the operations for a domain and depends on a
repository contract, so storage can be swapped without changing API
handlers.
"""
