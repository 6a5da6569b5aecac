from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenRefreshView
from drf_spectacular.views import (
    SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
)

from apps.cores.views import HealthCheckView


urlpatterns = [
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    path('api/health/', HealthCheckView.as_view(), name='health'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    path('api/', include('apps.users.urls')),
    path('api/', include('apps.jobs.urls')),
    path('api/', include('apps.applications.urls')),
    path('api/', include('apps.contract.urls')),
    path('api/', include('apps.submissions.urls')),
    path('api/', include('apps.disputes.urls')),
    path('api/', include('apps.files.urls')),
    path('api/', include('apps.messaging.urls')),
    path('api/', include('apps.notifications.urls')),
    path('api/', include('apps.reviews.urls')),
    path('api/', include('apps.adminpanel.urls')),

    path('django-admin/', admin.site.urls),
]
