"""Business operations behind the HTTP routes.

Routes hand these functions plain values plus the caller's verified user id;
the functions return JSON-ready dicts or raise one of the errors in ``errors``.
"""
