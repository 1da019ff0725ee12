# Generated manually for the catalog reference tables

from django.db import migrations, models


def described_option(name, verbose_name, verbose_name_plural):
    return migrations.CreateModel(
        name=name,
        fields=[
            ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
            ('description', models.CharField(max_length=255)),
            ('display_order', models.PositiveIntegerField(default=0)),
        ],
        options={
            'verbose_name': verbose_name,
            'verbose_name_plural': verbose_name_plural,
            'ordering': ['display_order', 'id'],
            'abstract': False,
        },
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        described_option('Budget', 'Budget', 'Budgets'),
        described_option('DeliveryTime', 'Delivery Time', 'Delivery Times'),
        described_option('ProjectType', 'Project Type', 'Project Types'),
        described_option('Proficiency', 'Proficiency', 'Proficiencies'),
        migrations.CreateModel(
            name='Skill',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
            ],
            options={
                'verbose_name': 'Skill',
                'verbose_name_plural': 'Skills',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Role',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
            ],
            options={
                'verbose_name': 'Role',
                'verbose_name_plural': 'Roles',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Language',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=8, unique=True)),
                ('name', models.CharField(max_length=100)),
            ],
            options={
                'verbose_name': 'Language',
                'verbose_name_plural': 'Languages',
                'ordering': ['name'],
            },
        ),
    ]
