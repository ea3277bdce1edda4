import uvicorn

from quizdesk import config
from quizdesk.web import app


if __name__ == "__main__":
    config.DATA_DIR.mkdir(parents=True, exist_ok=True)
    uvicorn.run(app, host=config.HOST, port=config.PORT)
