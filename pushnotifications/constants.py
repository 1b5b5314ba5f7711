"""
Constants for the Beams push notifications client.

Limits mirror what the publish and customer APIs accept.
"""

# Endpoints
DEFAULT_BASE_URL_TEMPLATE = "https://{instance_id}.pushnotifications.pusher.com"
INSTANCE_ID_PLACEHOLDER = "{instance_id}"

PUBLISH_INTERESTS_PATH = "/publish_api/v1/instances/{instance_id}/publishes"
PUBLISH_USERS_PATH = "/publish_api/v1/instances/{instance_id}/publishes/users"
DELETE_USER_PATH = "/customer_api/v1/instances/{instance_id}/users/{user_id}"

# Transport
DEFAULT_REQUEST_TIMEOUT_SECONDS = 60.0
LIBRARY_HEADER = "X-Pusher-Library"
LIBRARY_NAME = "pusher-push-notifications-python"

# Interests
MAX_INTERESTS_PER_PUBLISH = 100
MAX_INTEREST_LENGTH = 164
INTEREST_PATTERN = r"^[A-Za-z0-9_\-=@,.;]+$"

# Users
MAX_USERS_PER_PUBLISH = 1000
MAX_USER_ID_LENGTH = 164

# Reserved publish body keys
INTERESTS_KEY = "interests"
USERS_KEY = "users"

# Beams auth tokens
JWT_ALGORITHM = "HS256"
TOKEN_TTL_SECONDS = 24 * 60 * 60  # 24 hours
TOKEN_ISSUER_TEMPLATE = "https://{instance_id}.pushnotifications.pusher.com"
