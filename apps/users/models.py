from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Custom user manager keyed on the wallet address."""

    def create_user(self, wallet_address, password=None, **extra_fields):
        if not wallet_address:
            raise ValueError("Wallet address is required")

        user = self.model(
            wallet_address=wallet_address.lower().strip(),
            **extra_fields
        )
        # wallet users never log in with a password
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, wallet_address, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", "admin")  # Force admin role

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(wallet_address, password, **extra_fields)

    def get_by_natural_key(self, wallet_address):
        return self.get(wallet_address=wallet_address.lower())


class User(AbstractUser):
    ROLE_CHOICES = (
        ("client", "Client"),
        ("freelancer", "Freelancer"),
        ("admin", "Admin"),
    )

    wallet_address = models.CharField(max_length=42, unique=True, db_index=True)
    username = models.CharField(max_length=150, blank=True, default="")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="client")
    bio = models.TextField(blank=True, default="")
    avatar_url = models.URLField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "wallet_address"
    REQUIRED_FIELDS = []

    class Meta:
        db_table = "users"
        indexes = [
            models.Index(fields=["role", "is_active"], name="users_role_active_idx"),
        ]

    def save(self, *args, **kwargs):
        if self.wallet_address:
            self.wallet_address = self.wallet_address.lower().strip()
        super().save(*args, **kwargs)

    @property
    def is_admin_role(self):
        return self.role == "admin"

    def __str__(self):
        return self.username or self.wallet_address
