"""
Application configuration.

Settings are read from environment variables, optionally loaded from a
`.env` file at the project root.

Environment variables:
    - MONGODB_URI:          MongoDB connection string (default: mongodb://localhost:27017)
    - MONGODB_DB:           Database name (default: jobmarket)
    - CONTRACTS_COLLECTION: Collection holding contracts (default: contracts)
    - LOG_LEVEL:            Root log level for the `jobmarket` loggers (default: INFO)
    - CORS_ORIGINS:         Comma separated list of allowed origins (default: *)
    - COLLABORATOR_API_KEY: Key expected in X-Collaborator-Key for confirm/complete events (unset: rejected)
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

MONGO_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGODB_DB", "jobmarket")
CONTRACTS_COLLECTION = os.getenv("CONTRACTS_COLLECTION", "contracts")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
COLLABORATOR_API_KEY = os.getenv("COLLABORATOR_API_KEY")
