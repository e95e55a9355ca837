from app.config import Platform

PLATFORM_DISPLAY_NAMES = {
    Platform.GITHUB: "GitHub",
    Platform.GITLAB: "GitLab",
    Platform.REPLIT: "Replit",
    Platform.LOVABLE: "Lovable",
}

GENERIC_SUCCESS = "Operation Successful"
RESOURCE_RETRIEVED_SUCCESSFULLY = "Resource retrieved successfully"

# Repositories
REPOSITORIES_RETRIEVED_SUCCESSFULLY = "Repositories retrieved successfully"
REPOSITORY_CONNECTED_SUCCESSFULLY = "Repository connected successfully"
REPOSITORY_DISCONNECTED_SUCCESSFULLY = "Repository disconnected successfully"
REPOSITORY_REFRESHED_SUCCESSFULLY = "Repository refreshed successfully"
REPOSITORY_REFRESH_FAILED = "Repository refresh failed"
METADATA_FETCHED_SUCCESSFULLY = "Metadata fetched successfully"

# Platform tokens
TOKEN_SAVED_SUCCESSFULLY = "Token saved successfully"
TOKEN_DELETED_SUCCESSFULLY = "Token deleted successfully"
TOKENS_RETRIEVED_SUCCESSFULLY = "Tokens retrieved successfully"
TOKEN_VERIFIED_SUCCESSFULLY = "Token verified successfully"

# Webhooks
PROFILE_SYNCED_SUCCESSFULLY = "Profile synced"
WEBHOOK_EVENT_IGNORED = "Event ignored"
INVALID_WEBHOOK_SIGNATURE = "Webhook verification failed"
INVALID_WEBHOOK_PAYLOAD = "Webhook payload is not a valid event"

ENCRYPTION_KEY_NOT_FOUND = "Encryption key is not set."
