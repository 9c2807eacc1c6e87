"""External service gateways package.

Contains the clients for the hosted Supabase database and the chat-completion
API, plus the keep-alive HTTP server used by the hosting platform.
"""
