from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from unfold.admin import ModelAdmin, TabularInline
from unfold.forms import AdminPasswordChangeForm, UserChangeForm, UserCreationForm

from apps.common.constants import UserRole

from .models import User


class StaffInline(TabularInline):
    model = User
    fk_name = "vendor"
    extra = 0
    fields = ("email", "owner_name", "phone", "is_active")
    readonly_fields = ("email",)
    verbose_name = "Staff member"
    verbose_name_plural = "Staff"
    can_delete = False

    def has_add_permission(self, request, obj):
        return False


@admin.register(User)
class UserAdmin(BaseUserAdmin, ModelAdmin):
    model = User
    form = UserChangeForm
    add_form = UserCreationForm
    change_password_form = AdminPasswordChangeForm
    list_display = ("email", "role", "vendor", "restaurant_name", "is_active", "created_at")
    list_filter = ("role", "is_active")
    ordering = ("email",)
    search_fields = ("email", "restaurant_name", "owner_name")
    filter_horizontal = ("groups",)
    exclude = ("user_permissions",)
    readonly_fields = ("last_login", "created_at", "updated_at")
    autocomplete_fields = ["vendor"]

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Role", {"fields": ("role", "vendor")}),
        (
            "Restaurant profile",
            {
                "fields": (
                    "restaurant_name",
                    "owner_name",
                    "phone",
                    "location",
                    "description",
                    "opening_time",
                    "closing_time",
                )
            },
        ),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups")}),
        ("Important dates", {"fields": ("last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2", "role", "vendor", "restaurant_name", "is_active"),
            },
        ),
    )

    def get_inlines(self, request, obj):
        if obj is not None and obj.role == UserRole.VENDOR:
            return [StaffInline]
        return []
