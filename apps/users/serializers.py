from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from django.contrib.auth import get_user_model
from django.db import transaction
import logging

from .utils import get_nonce, consume_nonce, is_wallet_address, verify_wallet_signature

logger = logging.getLogger(__name__)

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    walletAddress = serializers.CharField(source="wallet_address", read_only=True)
    userRole = serializers.ChoiceField(source="role", choices=User.ROLE_CHOICES, required=False)
    avatarURL = serializers.URLField(source="avatar_url", required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "walletAddress",
            "username",
            "userRole",
            "bio",
            "avatarURL",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id"]

    def validate_userRole(self, value):
        current = getattr(self.instance, "role", None)
        if current == "admin" and value != "admin":
            raise serializers.ValidationError("Admin role cannot be changed from the profile.")
        if value == "admin" and current != "admin":
            raise serializers.ValidationError("Role can only be client or freelancer.")
        return value


class UserMiniSerializer(serializers.ModelSerializer):
    walletAddress = serializers.CharField(source="wallet_address", read_only=True)
    userRole = serializers.CharField(source="role", read_only=True)

    class Meta:
        model = User
        fields = ["id", "walletAddress", "username", "userRole"]


class AdminUserSerializer(serializers.ModelSerializer):
    walletAddress = serializers.CharField(source="wallet_address", read_only=True)
    userRole = serializers.CharField(source="role", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "walletAddress", "username", "userRole", "isActive", "createdAt"]


class VerifySignatureSerializer(serializers.Serializer):
    wallet = serializers.CharField()
    signature = serializers.CharField()

    def validate_wallet(self, value):
        value = value.lower().strip()
        if not is_wallet_address(value):
            raise serializers.ValidationError("Enter a valid wallet address.")
        return value

    def validate(self, data):
        wallet = data["wallet"]
        nonce = get_nonce(wallet)

        if nonce is None:
            raise serializers.ValidationError({"wallet": "Nonce not found"})

        if not verify_wallet_signature(wallet, data["signature"], nonce):
            raise AuthenticationFailed("Invalid signature")

        return data

    @transaction.atomic
    def create(self, validated_data):
        wallet = validated_data["wallet"]

        user = User.objects.filter(wallet_address=wallet).first()
        if user is None:
            user = User.objects.create_user(wallet_address=wallet, role="client")
            logger.info("New user created: wallet=%s, id=%s", wallet, user.id)

        # single use
        consume_nonce(wallet)
        return user
