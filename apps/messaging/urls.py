from django.urls import path
from .views import SendMessageView, JobMessagesView

urlpatterns = [
    path('messages/', SendMessageView.as_view(), name='message-send'),
    path('messages/<int:job_id>/', JobMessagesView.as_view(), name='message-list'),
]
