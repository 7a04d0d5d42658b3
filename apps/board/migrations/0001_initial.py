import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=50)),
                ('description', models.CharField(blank=True, default='', max_length=200)),
                ('category', models.CharField(choices=[('todo', 'A fazer'), ('InProgress', 'Em progresso'), ('done', 'Concluído')], max_length=20)),
                ('owner_id', models.CharField(db_index=True, help_text='Identificador do usuário dono da tarefa', max_length=128)),
                ('order', models.IntegerField()),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
            ],
            options={
                'db_table': 'task',
                'ordering': ['order', 'created_at', 'id'],
                'indexes': [models.Index(fields=['owner_id', 'order'], name='task_owner_order_idx')],
            },
        ),
    ]
