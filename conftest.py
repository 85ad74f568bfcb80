# Root conftest: pytest puts this directory on sys.path, so cart_service and
# shared import without an editable install.
import os

# Keep settings deterministic regardless of the developer's shell
os.environ.setdefault("API_BASE_URL", "http://stock-api.test")
os.environ.setdefault("CART_STORAGE_KEY", "@RocketShoes:cart")
os.environ.setdefault("KAFKA_BOOTSTRAP_SERVERS", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")
