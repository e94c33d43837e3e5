"""Constants for Session model field names"""


class SessionFields:
    """MongoDB field names for sessions collection"""

    MONGO_ID = "_id"

    STARTED_AT = "started_at"
    ENDED_AT = "ended_at"
    TITLE = "title"
    SUMMARY = "summary"
    IS_ACTIVE = "is_active"  # true while ended_at is null; carries the unique partial index
