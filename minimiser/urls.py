from django.urls import path
from . import views

urlpatterns = [
    # Minimise a Moore or Mealy machine
    path('api/minimise-machine/', views.minimise_machine, name='minimise_machine'),

    # Validation helpers for the table editor
    path('api/check-machine/', views.check_machine, name='check_machine'),
    path('api/matrix-template/', views.matrix_template, name='matrix_template'),

    # Run a machine over an input sequence
    path('api/simulate-machine/', views.simulate_machine_view, name='simulate_machine'),
]
