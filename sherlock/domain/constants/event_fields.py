class EventFields:
    """MongoDB field names for events collection"""

    MONGO_ID = "_id"

    SESSION_ID = "session_id"
    TYPE = "type"
    CONTENT = "content"
    RELATED_IDENTITY_ID = "related_identity_id"
    CREATED_AT = "created_at"
