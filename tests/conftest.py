import os
import tempfile

# must be set before auntrack_api is imported: the engine is built at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-for-the-auntrack-suite-0123456789"
os.environ["SEED_SAMPLE_EVENTS"] = "false"
os.environ["SESSION_DIR"] = tempfile.mkdtemp(prefix="auntrack-tests-")
