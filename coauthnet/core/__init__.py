from .models import (
    Author, Publication, AuthorNode, CoAuthorLink, CoAuthorGraph, UNKNOWN_GROUP
)
from .config import CoauthnetConfig, GraphConfig, RenderConfig, ExportConfig
from .logs import setup_logging
