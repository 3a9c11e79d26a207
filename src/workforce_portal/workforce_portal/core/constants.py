"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
Route paths are a contract with the router and the companion app.
"""

LANDING_ROUTE = "/"
LOGIN_ROUTE = "/login"
DASHBOARD_ROUTE = "/dashboard"
ONBOARDING_PREFIX = "/onboarding"
ONBOARDING_START_ROUTE = "/onboarding/company-setup"
TOO_MANY_REQUESTS_ROUTE = "/too-many-requests"

BIOMETRIC_STORAGE_KEY = "biometric-storage"
AUTH_STORAGE_KEY = "auth-storage"
OFFLINE_QUEUE_KEY = "offline_attendance_queue"
AUTH_TOKEN_KEY = "auth-token"
DEFAULT_DEVICE_STORAGE_PATH = ".device-storage"

DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_UPLOAD_CLIENT = "teemplot"
DEFAULT_UPLOAD_TIMEOUT_SECONDS = 120
DEFAULT_API_TIMEOUT_SECONDS = 10
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
