"""config URL Configuration

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path
from django.views.decorators.csrf import csrf_exempt
from django.views.generic.base import RedirectView
from graphene_django.views import GraphQLView
import json
import logging

# Customize admin site
admin.site.site_header = "Token Sale Admin"
admin.site.site_title = "Token Sale Admin Portal"
admin.site.index_title = "Sale, Vesting & Minter Administration"

logger = logging.getLogger(__name__)


class LoggingGraphQLView(GraphQLView):
    def dispatch(self, request, *args, **kwargs):
        if request.method == 'POST':
            try:
                body = json.loads(request.body)
                logger.info("GraphQL Query: %s", body.get('query', ''))
                logger.info("GraphQL Variables: %s", body.get('variables', {}))
            except ValueError as e:
                logger.error("Error parsing GraphQL request: %s", str(e))
        return super().dispatch(request, *args, **kwargs)


urlpatterns = [
    # Ensure /admin (no trailing slash) redirects to /admin/
    path('admin', RedirectView.as_view(url='/admin/', permanent=True)),
    path('admin/', admin.site.urls),
    path('graphql/', csrf_exempt(LoggingGraphQLView.as_view(graphiql=True))),
]
