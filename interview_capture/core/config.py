import os

# ✅ Environment
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite:///./interview_capture.db"
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Security
# NOTE: the fallback only exists so a local dev server can boot; production refuses it.
INSECURE_DEFAULT_SECRET_KEY = "dev-insecure-secret-change-me"
SECRET_KEY = os.getenv("SECRET_KEY") or INSECURE_DEFAULT_SECRET_KEY
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

# ✅ Companies
DEFAULT_COMPANY_NAME = os.getenv("DEFAULT_COMPANY_NAME", "Default Company")

# ✅ Uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join("public", "uploads"))
UPLOAD_URL_PREFIX = "/uploads"
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")

# ✅ OpenAI embeddings
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")

# ✅ Knowledge chunking (whitespace-delimited words)
CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "500"))
CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "50"))

# ✅ CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]


def is_production() -> bool:
    return ENVIRONMENT.lower() == "production"


def using_default_secret_key() -> bool:
    return SECRET_KEY == INSECURE_DEFAULT_SECRET_KEY
