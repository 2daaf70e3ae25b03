from django.contrib import admin
from django.urls import path, include
from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
)

schema_view = get_schema_view(
   openapi.Info(
      title="NFT Marketplace API",
      default_version='v1',
      description="Catalog, orders, P2P settlement, appeals and support",
   ),
   public=True,
   permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    #  api endpoints docs
    path('swagger<format>/', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),

    path('api/v1/accounts/', include('mainapps.accounts.urls')),
    path('api/v1/marketplace/', include('mainapps.marketplace.urls')),
    path('api/v1/', include('mainapps.orders.urls')),
    path('api/v1/p2p/', include('mainapps.p2p.urls')),
    path('api/v1/support/', include('mainapps.support.urls')),
]
