class ErrorCode:
    INTERNAL_SERVER_ERROR = "internal_server_error"
    DATABASE_ERROR = "database_error"
    STORAGE_UNAVAILABLE = "storage_unavailable"
