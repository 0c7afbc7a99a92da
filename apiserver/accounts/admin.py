# apiserver/accounts/admin.py
from django.contrib import admin
from .models import User


class UserAdmin(admin.ModelAdmin):
    """Admin for login accounts without Django's default user admin inheritance"""

    list_display = ['id', 'username', 'email', 'first_name', 'last_name', 'active', 'staff', 'admin', 'last_login']
    list_filter = ['active', 'staff', 'admin', 'last_login']
    search_fields = ['username', 'email', 'first_name', 'last_name']
    ordering = ['id']

    fieldsets = (
        ('Authentication', {
            'fields': ('username', 'password')
        }),
        ('Personal Information', {
            'fields': ('email', 'first_name', 'last_name')
        }),
        ('Permissions', {
            'fields': ('active', 'staff', 'admin'),
            'description': 'Admin = Superuser with all permissions, Staff = Can access admin panel'
        }),
        ('Important Dates', {
            'fields': ('last_login', 'date_joined'),
            'classes': ('collapse',)
        }),
    )

    readonly_fields = ['last_login', 'date_joined']

    actions = ['activate_users', 'deactivate_users']

    def activate_users(self, request, queryset):
        """Activate selected users"""
        updated = queryset.update(active=True)
        self.message_user(request, f'{updated} users were successfully activated.')
    activate_users.short_description = "Activate selected users"

    def deactivate_users(self, request, queryset):
        """Deactivate selected users"""
        updated = queryset.update(active=False)
        self.message_user(request, f'{updated} users were successfully deactivated.')
    deactivate_users.short_description = "Deactivate selected users"


admin.site.register(User, UserAdmin)
