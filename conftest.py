import os

# Set Env Vars BEFORE any imports to satisfy Pydantic Settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SESSION_SECRET_KEY"] = "test-session-secret"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_CATALOG"] = "false"

# Chat runs in simulated mode and the recommendation client is always injected by tests
os.environ.pop("AI_API_KEY", None)
