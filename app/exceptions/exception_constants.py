SERVICE_UNAVAILABLE = "Internal server error"

AUTH_FAILED = "Authentication failed"
INVALID_BEARER_TOKEN_SCHEMA = "Missing or invalid bearer token"
UNKNOWN_REASON = "UNKNOWN"
CLERK_AUTH_FAILED = "Authentication failed for unknown reasons."
CLERK_AUTH_FAILED_LOG_MESSAGE = "Clerk failed to authenticate | Reason: {reason} | Message: {message}"

GENERIC_BAD_REQUEST = "Bad request"
GENERIC_RESOURCE_NOT_FOUND = "Resource not found"
GENERIC_VALIDATION_FAILED_USER_MESSAGE = "Your request contains validation errors"

# Repository connection
REPOSITORY_LIMIT_REACHED = "Repository limit reached. You can connect up to {limit} repositories."
INVALID_REPOSITORY_URL = "Invalid {platform} URL. Expected format: {example}"
UNPARSABLE_REPOSITORY_URL = "Could not extract the owner and repository name from the URL"
REPOSITORY_ALREADY_CONNECTED = "This repository is already connected"
REPOSITORY_NOT_FOUND = "Repository not found"
REPOSITORY_STORE_FAILED_LOG_MESSAGE = "Repository store operation '{operation}' failed"

# Platform tokens
TOKEN_TOO_SHORT = "Please enter a valid API token"
TOKEN_NOT_FOUND = "No token saved for this platform"
TOKEN_VERIFICATION_UNSUPPORTED = "Token verification is not supported for {platform}"
REMOTE_LISTING_UNSUPPORTED = "Listing repositories is not supported for {platform}"

# Platform adapters
PLATFORM_NOT_FOUND_OR_PRIVATE = "Repository not found. It may be private or doesn't exist."
GITLAB_NOT_FOUND_OR_PRIVATE = "Project not found. It may be private or doesn't exist."
PLATFORM_INVALID_TOKEN = "Invalid or expired {platform} token."
PLATFORM_RATE_LIMITED = "{platform} API rate limit exceeded. Please try again later."
PLATFORM_ACCESS_DENIED = "Access denied. You may need to authenticate."
PLATFORM_NETWORK_ERROR = "Network error. Please check your connection."
GITHUB_GENERIC_FETCH_FAILED = "Failed to fetch repository"
GITLAB_GENERIC_FETCH_FAILED = "Failed to fetch project"
PLATFORM_FETCH_FAILED_LOG_MESSAGE = "Metadata fetch for {platform} repository {owner}/{repo} failed: {reason}"
PLATFORM_LISTING_FAILED = "Failed to fetch repositories"

# Profile
PROFILE_NOT_FOUND = "Profile not found"

# OAuth
OAUTH_COMING_SOON = "{platform} OAuth coming soon!"

# Stores
MISSING_USER_ID_TITLE = "MISSING_USER_ID"
MISSING_USER_ID_LOG_MESSAGE = "Owner scoped store called without a user_id"
