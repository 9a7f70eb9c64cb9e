import os
from dotenv import load_dotenv

load_dotenv()

MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017/work_time_compliance")

# Rule set assigned to tenants that have not chosen one yet
DEFAULT_RULE_SET = os.getenv("DEFAULT_RULE_SET", "eu")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
