"""Backend and screen routes used by the portal client."""

API_ROUTES = {
    "ADMIN_AUTH": {
        "LOGIN": "/v1/admin/auth/login",
        "FORGOT_PASSWORD": "/v1/admin/auth/forgot-password",
        "RESET_PASSWORD": "/v1/admin/auth/reset-password",
    },
    "STUDENT_AUTH": {
        "LOGIN": "/v1/auth/login",
    },
    "HEALTH": "/health",
    "DRIVES": "/v1/drives",
    "ADMIN_DRIVES": "/v1/admin/drives",
    "ADMIN_STUDENTS": "/v1/admin/students",
    "ADMIN_USERS": "/v1/admin/users",
    "BULK_UPLOAD_STUDENTS": "/v1/admin/students/bulk-upload",
    "ADMIN": "/v1/admin",
    "BRANDS": "/v1/brands",
    "SPOCS": "/v1/spocs",
    "ADMIN_SPOCS": "/v1/admin/spocs",
}

APP_ROUTES = {
    "DASHBOARD": "/dashboard",
    "LOGIN": "/login",
}
