# Importa todos los modelos para poblar Base.metadata (Alembic / tests)
from landing.models.business import Business, RetailProduct  # noqa: F401
from landing.models.content import Page, PageSection  # noqa: F401
from landing.models.preview import PreviewToken  # noqa: F401
