# Create the question bank tables in the configured database
import sys

from exam_ingest.config import config
from exam_ingest.models.db import init_database

if not config.database_url:
    sys.exit("DATABASE_URL or DB_CONNECTION_STRING is not set.")

config.print_config()
init_database(config.database_url)
print("Tables created in question bank database!")
