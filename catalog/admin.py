from django.contrib import admin

from .models import Budget, DeliveryTime, Language, Proficiency, ProjectType, Role, Skill


@admin.register(Budget, DeliveryTime, ProjectType, Proficiency)
class DescribedOptionAdmin(admin.ModelAdmin):
    list_display = ['description', 'display_order']
    ordering = ['display_order']


@admin.register(Skill, Role)
class NamedOptionAdmin(admin.ModelAdmin):
    list_display = ['name']
    search_fields = ['name']


@admin.register(Language)
class LanguageAdmin(admin.ModelAdmin):
    list_display = ['code', 'name']
    search_fields = ['code', 'name']
