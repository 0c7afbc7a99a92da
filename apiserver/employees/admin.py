from django.contrib import admin
from .models import Employee

@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['emp_id', 'username', 'name', 'company_email', 'role', 'designation', 'date_of_joining']
    list_filter = ['role', 'designation', 'gender']
    search_fields = ['emp_id', 'username', 'name', 'company_email']
    ordering = ['emp_id']

    fieldsets = (
        ('Login', {
            'fields': ('emp_id', 'username')
        }),
        ('Basic Information', {
            'fields': ('name', 'gender', 'age')
        }),
        ('Job Information', {
            'fields': ('company_email', 'role', 'designation', 'salary', 'date_of_joining')
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        # empId and username are fixed once the record exists
        if obj:
            return ['emp_id', 'username']
        return []
