from dotenv import load_dotenv
import os

# Load environment variables from .env file before the config classes read them
load_dotenv()

from staycore_backend import create_app  # noqa: E402

app = create_app(os.getenv("CONFIG_CLASS", "staycore_backend.config.DevelopmentConfig"))

if __name__ == "__main__":
    port = int(os.getenv("PORT", 8000))  # Default to 8000 if not in .env
    app.run(host="0.0.0.0", port=port)
