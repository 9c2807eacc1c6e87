"""Telegram bot message templates and constants.

Contains all user-facing message templates, usage hints, error messages and
formatting constants for bot responses. Centralizes message management so
handlers, validators and gateways show consistent text.
"""

# Bot commands and descriptions
START_MESSAGE = """
👋 *Welcome to the School Bot!*

Here are the commands you can use:

1️⃣ `/add <first_name> <class> <age>`
   - Save a new member
   - Example: `/add Swayam BTECH 18`

2️⃣ `/tag <class>`
   - Tag all members of a specific class
   - Example: `/tag BTECH`

3️⃣ `/list`
   - Show every saved member

4️⃣ `/explain <topic> <word_limit>`
   - Get a school-level explanation of a topic
   - Example: `/explain Photosynthesis 50`
   - Word limit must be 10-1000

5️⃣ `/alert everyone`
   - Mention everyone on the group roster (admins only)

📝 Notes:
- All inputs are validated
- Mentions are sent in chunks of 50 users to avoid message limits
- Explanations are saved to the database automatically
"""

BOT_COMMANDS = {
    "start": "Show the command guide",
    "add": "Save a member: /add <first_name> <class> <age>",
    "tag": "Tag a class: /tag <class>",
    "list": "Show all saved members",
    "explain": "Explain a topic: /explain <topic> <word_limit>",
    "alert": "Mention the whole roster: /alert everyone",
}

# Usage hints
ADD_USAGE = "⚠️ Usage: `/add <first_name> <class> <age>`\nExample: `/add Swayam BTECH 18`"
TAG_USAGE = "⚠️ Usage: `/tag <class>`\nExample: `/tag BTECH`"
EXPLAIN_USAGE = "⚠️ Usage: `/explain <topic> <word_limit>`\nExample: `/explain Photosynthesis 50`"
ALERT_USAGE = "⚠️ Usage: `/alert everyone`"

# Validation errors
FIRST_NAME_INVALID = "❌ First name must contain only alphabets. Example: `Swayam`"
CLASS_EMPTY = "❌ Class cannot be empty. Example: `BTECH`"
AGE_INVALID = "❌ Age must be a number between 5 and 120. Example: `18`"
TOPIC_EMPTY = "⚠️ Topic cannot be empty. Example: `/explain Photosynthesis 50`"
WORD_LIMIT_INVALID = "⚠️ Word limit must be a number between 10 and 1000. Example: `50`"

# Gateway errors
STORE_INSERT_FAILED = "⚠️ Database insert failed. Try again later."
STORE_QUERY_FAILED = "⚠️ DB query failed. Try again later."
GENERATION_FAILED = "❌ Could not generate explanation. Try again later."
UNEXPECTED_ERROR = "⚠️ Unexpected error occurred. Check logs."

# Authorization
ALERT_DENIED = "⛔ Only group admins can use /alert."

# Command results
MEMBER_ADDED = (
    "✅ *Member added successfully!*\n\n"
    "🆔 ID: `{id}`\n"
    "👤 Name: {first_name}\n"
    "🏫 Class: {class_name}\n"
    "🎂 Age: {age}\n"
    "📥 Added by: {added_by}"
)
NO_MEMBERS_IN_CLASS = "❌ No members found in class {class_name}!"
NO_MEMBERS = "❌ No members saved yet! Use /add to register one."
NO_RECIPIENTS = "❌ Nobody is on the alert roster for this group yet."

TAG_CAPTION = "📢 {class_name} Members:"
ALERT_CAPTION = "🚨 Attention everyone!"
ALERT_MENTION_LABEL = "🔔"
LIST_CAPTION = "📋 Members:"
LIST_HEADER = ("Name", "Class", "Age")

EXPLANATION_REPLY = "🧠 Topic: {topic}\n📝 Explanation ({word_limit} words):\n{explanation}"
NO_EXPLANATION = "No explanation found."

EXPLAIN_PROMPT = (
    "Explain {topic} in {word_limit} words in simple, school-level language, "
    "avoid high-level words, Hinglish/English mix allowed."
)

# Keep-alive endpoint
ALIVE_MESSAGE = "🚀 Bot is alive and running."
