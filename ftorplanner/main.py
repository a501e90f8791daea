import logging

import uvicorn
from ftorplanner.api.api_run import app
from ftorplanner.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL, STORE_FILE


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    local_url = f"http://localhost:{APP_PORT}"
    # Print a friendly message that points to the URL you can open in a browser
    print(f"Uvicorn running on {local_url} (Press CTRL+C to quit)")
    print(f"Data store: {STORE_FILE}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
