"""
auth — Account lifecycle module.

Provides:
  • Signup / verification / login / profile / password reset routes
  • Token creation & verification (HMAC-signed, scoped)
  • Password hashing (bcrypt)
  • ``get_current_account_id`` FastAPI dependency
"""
