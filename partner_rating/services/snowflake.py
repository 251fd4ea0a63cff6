"""
Snowflake Connection Factory - Partner Rating Platform
partner_rating/services/snowflake.py

One new connection per repository call; credentials come from Settings.
"""
import snowflake.connector
from dotenv import load_dotenv

from partner_rating.config import get_settings


def get_snowflake_connection():
    """
    Snowflake connection factory.
    Used by repositories via dependency injection.
    """
    # Load environment variables from .env file
    load_dotenv()
    settings = get_settings()

    password = settings.SNOWFLAKE_PASSWORD
    return snowflake.connector.connect(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=password.get_secret_value() if password else None,
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
        role=settings.SNOWFLAKE_ROLE,
    )
