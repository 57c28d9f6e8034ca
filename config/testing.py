SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789"
SESSION_TTL_HOURS = 24

STORAGE_BACKEND = "memory"
DB_CONFIG = None

CORS_ORIGINS = ["http://localhost:8080"]
PORT = 3050

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
