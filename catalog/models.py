from django.core.validators import MinValueValidator
from django.db import models

DEFAULT_EXAM_CATEGORY = 'Other Exams'
DEFAULT_FAQ_CATEGORY = 'General'


class ExamCatalogItem(models.Model):
    name = models.CharField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=120, blank=True)
    current_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Exam'

    def __str__(self):
        return self.name

    @property
    def display_category(self):
        return self.category.strip() or DEFAULT_EXAM_CATEGORY


class FaqEntry(models.Model):
    question = models.CharField(max_length=300)
    answer = models.TextField()
    category = models.CharField(max_length=120, blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-id']
        verbose_name = 'FAQ Entry'
        verbose_name_plural = 'FAQ Entries'

    def __str__(self):
        return self.question

    @property
    def display_category(self):
        return self.category.strip() or DEFAULT_FAQ_CATEGORY
