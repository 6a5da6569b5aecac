from django.urls import path
from .views import NotificationListCreateView, MarkNotificationReadView

urlpatterns = [
    path('notifications/', NotificationListCreateView.as_view(), name='notifications'),
    path('notifications/<int:pk>/read/', MarkNotificationReadView.as_view(), name='notification-read'),
]
