# app/core/constants.py

# Collections
ADMINS = "admins"
ACTIVITIES = "activities"
PROGRESS = "progress"
FEEDBACK = "feedback"
RECYCLE_BIN = "recycleBin"
DISPLAY_NAME_CHANGES = "display_name_changes"

# Query caps
ACTIVITY_LIMIT = 20
DISPLAY_NAME_CHANGE_LIMIT = 50
FEEDBACK_LIMIT = 100
AUTH_USER_LIMIT = 1000

# Feedback lifecycle
FEEDBACK_STATUSES = ("new", "read")
RESOLVED = "resolved"
RECYCLE_RETENTION_DAYS = 30

LEARN_FLAGS = (
    "learnedAlphabetAll",
    "learnedNumbersAll",
    "learnedColoursAll",
    "learnedFruitsAll",
    "learnedAnimalsAll",
    "learnedVerbsAll",
)
