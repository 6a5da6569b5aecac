from django.urls import path
from .views import (
    NonceView,
    VerifySignatureView,
    VerifyTokenView,
    UserProfileView,
    DashboardView,
)


urlpatterns = [
    # Wallet authentication
    path('auth/nonce/<str:wallet>/', NonceView.as_view(), name='auth-nonce'),
    path('auth/verify/', VerifySignatureView.as_view(), name='auth-verify'),
    path('auth/verify-token/', VerifyTokenView.as_view(), name='auth-verify-token'),

    # Profiles
    path('users/<str:wallet>/', UserProfileView.as_view(), name='user-profile'),
    path('users/<str:wallet>/dashboard/', DashboardView.as_view(), name='user-dashboard'),
]
