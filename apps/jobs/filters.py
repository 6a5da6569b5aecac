import django_filters

from apps.jobs.models import Job


class JobFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(field_name="category", lookup_expr="iexact")
    status = django_filters.ChoiceFilter(field_name="status", choices=Job.STATUS)
    minBudget = django_filters.NumberFilter(field_name="budget", lookup_expr="gte")
    maxBudget = django_filters.NumberFilter(field_name="budget", lookup_expr="lte")

    class Meta:
        model = Job
        fields = ["category", "status", "minBudget", "maxBudget"]
