# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

# Caminhos sem barra final: são os que o frontend já chama
urlpatterns = [
    path('addtasks', views.add_task, name='add_task'),
    path('tasksget', views.list_tasks, name='list_tasks'),
    path('tasks/<str:task_id>', views.task_detail, name='task_detail'),
]
