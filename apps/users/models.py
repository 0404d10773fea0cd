from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from apps.common.constants import UserRole
from apps.common.models import BaseModel


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("The Email field must be set")

        role = extra_fields.get("role", UserRole.VENDOR)
        has_vendor = extra_fields.get("vendor") is not None or extra_fields.get("vendor_id") is not None
        if role == UserRole.STAFF and not has_vendor:
            raise ValueError("Staff users must belong to a vendor.")
        if role != UserRole.STAFF and has_vendor:
            raise ValueError("Only staff users can belong to a vendor.")

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_staff(self, vendor, email, password=None, **extra_fields):
        extra_fields["role"] = UserRole.STAFF
        return self.create_user(email, password, vendor=vendor, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", UserRole.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin, BaseModel):
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.VENDOR)
    vendor = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="staff_members",
        db_column="vendor_id",
        limit_choices_to={"role": UserRole.VENDOR},
    )
    # Django admin-site flag, unrelated to the staff role.
    is_staff = models.BooleanField(default=False)

    restaurant_name = models.CharField(max_length=100, blank=True)
    owner_name = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    location = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    opening_time = models.TimeField(null=True, blank=True)
    closing_time = models.TimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        db_table = "user"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role"], name="user_role_idx"),
            models.Index(fields=["vendor"], name="user_vendor_idx"),
        ]

    def clean(self):
        super().clean()
        if self.role == UserRole.STAFF and self.vendor_id is None:
            raise ValidationError({"vendor": "Staff users must belong to a vendor."})
        if self.role != UserRole.STAFF and self.vendor_id is not None:
            raise ValidationError({"vendor": "Only staff users can belong to a vendor."})

    @property
    def display_name(self):
        return self.restaurant_name or self.owner_name or self.email

    def __str__(self):
        return f"{self.email} ({self.role})"
