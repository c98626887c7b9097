from mangum import Mangum

from todoapp.config import load_settings
from todoapp.logging import setup_logging
from todoapp.main import create_web_app

settings = load_settings()
setup_logging(settings.log_level, settings.log_format)

app = create_web_app(settings=settings)

handler = Mangum(app, lifespan="off")
