from django.urls import path
from .views import EmployeeListCreateView, EmployeeDetailView

urlpatterns = [
    path('', EmployeeListCreateView.as_view(), name='employee-list-create'),
    # str, not int: a non-numeric id must reach the view and get a 400
    path('<str:emp_id>/', EmployeeDetailView.as_view(), name='employee-detail'),
]
