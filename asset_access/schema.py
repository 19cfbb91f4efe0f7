import graphene

from asset_access.services.access_controller import AssetAccessController
from ledger.exceptions import PhaseError


class MinterUpdateType(graphene.ObjectType):
    new_minter = graphene.String()
    end_grace_period = graphene.Float()
    has_to_be_executed = graphene.Boolean()


class Query(graphene.ObjectType):
    current_minter = graphene.String()
    pending_minter_update = graphene.Field(MinterUpdateType)

    def resolve_current_minter(self, info):
        try:
            return AssetAccessController().get_current_minter()
        except PhaseError:
            return None

    def resolve_pending_minter_update(self, info):
        try:
            update = AssetAccessController().get_pending_update()
        except PhaseError:
            return None
        return MinterUpdateType(
            new_minter=update.new_minter,
            end_grace_period=update.end_grace_period,
            has_to_be_executed=update.has_to_be_executed,
        )
