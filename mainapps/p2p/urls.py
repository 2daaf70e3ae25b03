from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'transfers', views.P2pTransferViewSet, basename='p2p-transfer')
router.register(r'appeals', views.AppealViewSet, basename='p2p-appeal')

urlpatterns = [
    path('', include(router.urls)),
]
