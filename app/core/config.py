import os

# Base de datos (SQLite por defecto para desarrollo)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./race_dashboard.db")

# Tokens JWT
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Orígenes del frontend separados por comas
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

# Día con el que empieza la semana en el calendario (monday, sunday...)
WEEK_START = os.getenv("WEEK_START", "monday").lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
