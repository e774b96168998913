# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Access tokens are never configured: they live in process memory only.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "PLANNER_APP_NAME": "App display name (default: planner).",
    "PLANNER_LOG_LEVEL": "Console logging level (default: INFO).",
    "PLANNER_LOG_DIR": "Directory for planner.log (default: .local/planner).",
    # Backend
    "PLANNER_API_URL": "Backend base address (default: http://localhost:8000).",
    "PLANNER_HEALTH_PATH": "Read-only endpoint used to prime the CSRF cookie (default: /health).",
    "PLANNER_LOGIN_PATH": "Form login endpoint (default: /auth/login).",
    "PLANNER_REGISTER_PATH": "Registration endpoint (default: /auth/register).",
    "PLANNER_REFRESH_PATH": "Refresh-cookie -> access token endpoint (default: /auth/refresh).",
    # Anti-forgery
    "PLANNER_CSRF_COOKIE_NAME": "Readable cookie carrying the CSRF token (default: XSRF-TOKEN).",
    "PLANNER_CSRF_HEADER_NAME": "Header echoing it on state-changing calls (default: X-XSRF-TOKEN).",
    # Navigation
    "PLANNER_ENTRY_PATH": "Unauthenticated entry point used after session expiry (default: /).",
    # Transport
    "PLANNER_CONNECT_TIMEOUT_SECONDS": "Connect timeout (default: 5).",
    "PLANNER_READ_TIMEOUT_SECONDS": "Read timeout, never below the connect timeout (default: 25).",
    # Session behaviour
    "PLANNER_SINGLE_FLIGHT_REFRESH": (
        "Share one in-flight token refresh between concurrent 401s (true/false, default: false). "
        "Enable only if the backend's refresh endpoint tolerates it."
    ),
}

# Example .env:
#
# PLANNER_API_URL=https://planner-api.onrender.com
# PLANNER_LOG_LEVEL=DEBUG
# PLANNER_SINGLE_FLIGHT_REFRESH=true
