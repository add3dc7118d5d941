import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from salon_backend.core import config
from salon_backend.core.logging import configure_logging
from salon_backend.database import Base, engine
from salon_backend.models import appointment, employee, order, tenant  # noqa: F401
from salon_backend.routes import appointment_routes, employee_routes, order_routes, settings_routes

configure_logging()
config.validate_runtime_config()

app = FastAPI(title='Salon Scheduling API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Salon Scheduling API Running'}


app.include_router(appointment_routes.router, prefix='/appointments')
app.include_router(employee_routes.router, prefix='/employees')
app.include_router(order_routes.router, prefix='/orders')
app.include_router(settings_routes.router, prefix='/settings')
