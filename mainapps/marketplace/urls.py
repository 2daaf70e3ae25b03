from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'nfts', views.NftViewSet, basename='nft')
router.register(r'categories', views.CategoryViewSet, basename='category')
router.register(r'payment-methods', views.PaymentMethodViewSet, basename='payment-method')
router.register(r'p2p-networks', views.P2pNetworkViewSet, basename='p2p-network')
router.register(r'settings', views.SettingViewSet, basename='setting')

urlpatterns = [
    path('', include(router.urls)),
]
