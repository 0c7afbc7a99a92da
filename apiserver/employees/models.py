from django.db import models


class Employee(models.Model):
    """
    Work record of a registered login account.

    ``emp_id`` is the id of the login account (``accounts.User``) the record
    was created for. It is a plain column rather than a foreign key, so the
    login account can still be removed on its own.
    """
    emp_id = models.BigIntegerField(primary_key=True)
    username = models.CharField(max_length=150)
    name = models.CharField(max_length=200, blank=True, null=True)
    company_email = models.EmailField(max_length=255)
    designation = models.CharField(max_length=100, blank=True, null=True)
    salary = models.IntegerField(blank=True, null=True)
    role = models.CharField(max_length=50, db_index=True)
    gender = models.CharField(max_length=20, blank=True, null=True)
    age = models.IntegerField(blank=True, null=True)
    date_of_joining = models.DateTimeField(blank=True, null=True)

    # Fields the update operation is allowed to overwrite
    UPDATABLE_FIELDS = ('company_email', 'designation', 'salary', 'gender', 'date_of_joining')

    def __str__(self):
        return f"{self.emp_id} - {self.username}"
