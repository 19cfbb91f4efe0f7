from token_sale import schema as token_sale_schema
from asset_access import schema as asset_access_schema
import graphene
import logging

logger = logging.getLogger(__name__)


class Query(token_sale_schema.Query, asset_access_schema.Query, graphene.ObjectType):
	pass


# Register all types
types = [
	token_sale_schema.SaleSettingsType,
	asset_access_schema.MinterUpdateType,
]

schema = graphene.Schema(
	query=Query,
	types=types
)

__all__ = ['schema']
