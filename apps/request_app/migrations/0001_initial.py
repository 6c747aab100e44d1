import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('post_app', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TeachRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('kind', models.CharField(choices=[('post', 'Post-bound'), ('subject', 'Subject-bound')], editable=False, max_length=10)),
                ('subject', models.CharField(blank=True, max_length=100, null=True)),
                ('tutor_name', models.CharField(max_length=100)),
                ('student_name', models.CharField(max_length=100)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('post', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='teach_requests', to='post_app.post')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='teach_requests_as_student', to=settings.AUTH_USER_MODEL)),
                ('tutor', models.ForeignKey(limit_choices_to={'role': 'tutor'}, on_delete=django.db.models.deletion.CASCADE, related_name='teach_requests_as_tutor', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(models.Q(('kind', 'post'), ('post__isnull', False), ('subject__isnull', True)), models.Q(models.Q(('kind', 'subject'), ('post__isnull', True), ('subject__isnull', False)), models.Q(('subject', ''), _negated=True)), _connector='OR'), name='teach_request_post_xor_subject'),
                    models.UniqueConstraint(condition=models.Q(('status', 'pending'), ('kind', 'post')), fields=('post', 'tutor'), name='unique_pending_post_request'),
                    models.UniqueConstraint(condition=models.Q(('status', 'pending'), ('kind', 'subject')), fields=('tutor', 'student', 'subject'), name='unique_pending_subject_request'),
                ],
            },
        ),
    ]
