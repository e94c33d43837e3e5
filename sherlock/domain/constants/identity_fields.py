"""Constants for Identity model field names"""


class IdentityFields:
    """MongoDB field names for identities collection"""

    MONGO_ID = "_id"

    NAME = "name"
    RELATIONSHIP_STATUS = "relationship_status"
    FACE_EMBEDDING = "face_embedding"
    HEADSHOT_MEDIA_URL = "headshot_media_url"
    LINKEDIN_URL = "linkedin_url"
    METADATA = "metadata"
    CREATED_AT = "created_at"
