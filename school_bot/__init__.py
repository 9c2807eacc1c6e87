"""School Bot Application Package.

A Telegram group bot that registers class members, mentions whole classes in
batches, broadcasts alerts to a saved roster and fetches short school-level
explanations from a chat-completion API. Members and explanations are kept in
a hosted Supabase database.

The application follows a modular architecture with separate concerns for:
- Bot handlers, argument parsing and validation
- Batched mention delivery
- Database and text-generation gateways
- Keep-alive HTTP endpoint for the hosting platform
"""
