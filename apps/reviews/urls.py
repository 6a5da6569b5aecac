from django.urls import path
from .views import CreateReviewView, UserReviewsView

urlpatterns = [
    path('reviews/', CreateReviewView.as_view(), name='review-create'),
    path('reviews/<int:user_id>/', UserReviewsView.as_view(), name='review-user-list'),
]
