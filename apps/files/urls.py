from django.urls import path
from .views import FileUploadView

urlpatterns = [
    path('files/upload/', FileUploadView.as_view(), name='file-upload'),
]
