# Generated manually for the project lifecycle models

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def timestamps():
    return [
        ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='Timestamp when record was created')),
        ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated')),
    ]


def display_order():
    return ('display_order', models.PositiveIntegerField(db_index=True, default=0))


AVAILABILITY_CHOICES = [
    ('NotAvailable', 'Not available'),
    ('PartTime', 'Part time'),
    ('FullTime', 'Full time'),
    ('WeeklyHours', 'Weekly hours'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('catalog', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                ('title', models.CharField(max_length=255, validators=[django.core.validators.MinLengthValidator(1, 'Title must not be empty.')])),
                ('summary', models.TextField(blank=True)),
                ('description', models.TextField(blank=True)),
                ('url', models.URLField(blank=True)),
                ('delivery_date', models.DateField(blank=True, null=True)),
                ('state', models.CharField(choices=[
                    ('draft', 'Draft'),
                    ('deployed', 'Deployed'),
                    ('rejected_by_coordinator', 'Rejected by coordinator'),
                    ('scope_proposed', 'Scope proposed'),
                    ('scope_rejected', 'Scope rejected'),
                    ('scope_accepted', 'Scope accepted'),
                    ('team_assigned', 'Team assigned'),
                    ('completed', 'Completed'),
                    ('payment_released', 'Payment released'),
                ], db_index=True, default='draft', max_length=32)),
                ('creation_status', models.CharField(blank=True, choices=[
                    ('creating', 'Creating'),
                    ('created', 'Created'),
                    ('failed', 'Failed'),
                ], max_length=16)),
                ('creation_error', models.TextField(blank=True)),
                ('coordinator_approval_status', models.CharField(blank=True, max_length=16)),
                ('proposal_rejection_reason', models.TextField(blank=True)),
                ('advance_payment_percentage', models.PositiveSmallIntegerField(default=25, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('document_hash', models.CharField(blank=True, max_length=66)),
                ('contract_address', models.CharField(blank=True, max_length=128)),
                ('budget', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='projects', to='catalog.budget')),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='projects', to='accounts.client')),
                ('consultant', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='consulted_projects', to='accounts.developer')),
                ('delivery_time', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='projects', to='catalog.deliverytime')),
                ('project_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='projects', to='catalog.projecttype')),
            ],
            options={
                'verbose_name': 'Project',
                'verbose_name_plural': 'Projects',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['client', 'state'], name='projects_pr_client__c1a2b3_idx'),
                    models.Index(fields=['consultant', 'state'], name='projects_pr_consult_d4e5f6_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Objective',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                display_order(),
                ('description', models.TextField(validators=[django.core.validators.MinLengthValidator(1, 'Description must not be empty.')])),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='objectives', to='projects.project')),
            ],
            options={
                'verbose_name': 'Objective',
                'verbose_name_plural': 'Objectives',
                'ordering': ['display_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Constraint',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                display_order(),
                ('description', models.TextField(validators=[django.core.validators.MinLengthValidator(1, 'Description must not be empty.')])),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='constraints', to='projects.project')),
            ],
            options={
                'verbose_name': 'Constraint',
                'verbose_name_plural': 'Constraints',
                'ordering': ['display_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Comment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                ('consultant_comment', models.TextField(blank=True)),
                ('client_response', models.TextField(blank=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='projects.project')),
            ],
            options={
                'verbose_name': 'Comment',
                'verbose_name_plural': 'Comments',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='Milestone',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                display_order(),
                ('title', models.CharField(max_length=255, validators=[django.core.validators.MinLengthValidator(1, 'Title must not be empty.')])),
                ('description', models.TextField(blank=True)),
                ('budget', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('delivery_date', models.DateField(blank=True, null=True)),
                ('state', models.CharField(blank=True, choices=[
                    ('pending', 'Pending'),
                    ('task_in_progress', 'In progress'),
                    ('in_review', 'In review'),
                    ('completed', 'Completed'),
                    ('rejected', 'Rejected'),
                    ('paid', 'Paid'),
                ], db_index=True, max_length=32, null=True)),
                ('availability', models.CharField(blank=True, choices=AVAILABILITY_CHOICES, max_length=32)),
                ('needed_hours', models.PositiveIntegerField(blank=True, null=True)),
                ('documentation', models.TextField(blank=True)),
                ('links', models.TextField(blank=True)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('delivery_time', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='milestones', to='catalog.deliverytime')),
                ('developer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='milestones', to='accounts.developer')),
                ('proficiency', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='milestones', to='catalog.proficiency')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='milestones', to='projects.project')),
                ('role', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='milestones', to='catalog.role')),
                ('skills', models.ManyToManyField(blank=True, related_name='milestones', to='catalog.skill')),
            ],
            options={
                'verbose_name': 'Milestone',
                'verbose_name_plural': 'Milestones',
                'ordering': ['display_order', 'id'],
                'indexes': [
                    models.Index(fields=['project', 'display_order'], name='projects_mi_project_a7b8c9_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                display_order(),
                ('title', models.CharField(max_length=255, validators=[django.core.validators.MinLengthValidator(1, 'Title must not be empty.')])),
                ('description', models.TextField(blank=True)),
                ('budget', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('currency', models.CharField(default='USD', max_length=3)),
                ('delivery_date', models.DateField(blank=True, null=True)),
                ('milestone', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tasks', to='projects.milestone')),
                ('role', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tasks', to='catalog.role')),
            ],
            options={
                'verbose_name': 'Task',
                'verbose_name_plural': 'Tasks',
                'ordering': ['display_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Assignation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                ('state', models.CharField(choices=[
                    ('none', 'None'),
                    ('pending', 'Pending'),
                    ('accepted', 'Accepted'),
                    ('rejected', 'Rejected'),
                ], default='pending', max_length=16)),
                ('comment', models.TextField(blank=True)),
                ('developer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='assignations', to='accounts.developer')),
                ('milestone', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='assignation', to='projects.milestone')),
            ],
            options={
                'verbose_name': 'Assignation',
                'verbose_name_plural': 'Assignations',
            },
        ),
        migrations.CreateModel(
            name='MilestoneLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                ('from_client', models.BooleanField(default=False)),
                ('from_consultant', models.BooleanField(default=False)),
                ('title', models.CharField(max_length=255)),
                ('msg', models.TextField(blank=True)),
                ('show_developer', models.BooleanField(default=True)),
                ('author', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='milestone_logs', to=settings.AUTH_USER_MODEL)),
                ('milestone', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='logs', to='projects.milestone')),
            ],
            options={
                'verbose_name': 'Milestone Log',
                'verbose_name_plural': 'Milestone Logs',
                'ordering': ['created_at', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Vote',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *timestamps(),
                ('score', models.FloatField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('comment', models.TextField(blank=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='votes', to='projects.project')),
                ('target', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='votes_received', to=settings.AUTH_USER_MODEL)),
                ('voter', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='votes_cast', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Vote',
                'verbose_name_plural': 'Votes',
                'constraints': [
                    models.UniqueConstraint(fields=('project', 'voter', 'target'), name='unique_vote_per_project_voter_target'),
                ],
            },
        ),
    ]
