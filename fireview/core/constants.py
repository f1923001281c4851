"""Core constants: persisted state keys and shared literal values."""

# Local state keys (kept from the browser console so exported state stays readable)
STATE_KEY_PROJECT_ID = "fireview_firebase_project_id"
STATE_KEY_COLLECTIONS = "fireview_user_collections"

# Prompt template used for collection summaries
SUMMARY_TEMPLATE_NAME = "summarizeCollectionPrompt"

# Placeholder ID used in import error messages when the item has no explicit ID
AUTO_ID_LABEL = "auto"
