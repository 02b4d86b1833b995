import strawberry
from apps.campaigns.graphql.queries import CampaignQueries
from apps.coupons.graphql.queries import CouponQueries
from apps.custom_ads.graphql.queries import CustomAdQueries
from apps.authentication.graphql.queries import AuthQueries

@strawberry.type
class Query(CampaignQueries, CouponQueries, CustomAdQueries, AuthQueries):
    pass

schema = strawberry.Schema(query=Query)
