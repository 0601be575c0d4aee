import logging

from career_assistant import create_app, load_settings

settings = load_settings()
app = create_app(settings)

logger = logging.getLogger("career_assistant.server")

if __name__ == '__main__':
    logger.info("Career assistant running on port %s", settings.port)
    app.run(host='0.0.0.0', port=settings.port)
