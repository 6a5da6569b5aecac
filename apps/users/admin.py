from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("wallet_address", "username", "role", "is_active", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("wallet_address", "username")
