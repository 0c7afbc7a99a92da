from rest_framework import serializers
from .models import Employee


class EmployeeSerializer(serializers.ModelSerializer):
    """Employee record as exposed on the wire (camelCase keys)"""
    empId = serializers.IntegerField(source='emp_id', read_only=True)
    companyEmail = serializers.EmailField(source='company_email', read_only=True)
    dateOfJoining = serializers.DateTimeField(source='date_of_joining', read_only=True)

    class Meta:
        model = Employee
        fields = [
            'empId', 'username', 'name', 'companyEmail', 'designation',
            'salary', 'role', 'gender', 'age', 'dateOfJoining',
        ]
        read_only_fields = fields
