"""MongoDB connection and Beanie document registration."""
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from feedesk.config import settings
from feedesk.models import (
    AcademicSession,
    Branch,
    FeePlan,
    OrgSettings,
    Payment,
    Semester,
    Staff,
    Student,
)

DOCUMENT_MODELS = [
    Branch,
    Semester,
    AcademicSession,
    OrgSettings,
    Staff,
    FeePlan,
    Student,
    Payment,
]

_client = None


async def db_startup(database=None):
    """Connect to MongoDB and initialize Beanie ODM (creates the unique indexes)."""
    global _client
    if database is None:
        _client = AsyncIOMotorClient(settings.mongodb_url)
        database = _client[settings.mongodb_db_name]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)


async def db_shutdown():
    """Close MongoDB connection."""
    global _client
    if _client:
        _client.close()
        _client = None


async def init_db(database=None):
    """Alias for db_startup."""
    await db_startup(database)
