"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification (HMAC-SHA256)
  • Password hashing (bcrypt)
  • Register / Login / Me API routes
  • ``get_current_identity`` FastAPI dependency
"""
