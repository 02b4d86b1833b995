from django.core.management.base import BaseCommand

from apps.notifications.default_templates import DEFAULT_TEMPLATES
from apps.notifications.models import EmailTemplate


class Command(BaseCommand):
    help = 'Create the default email templates that do not exist yet'

    def add_arguments(self, parser):
        parser.add_argument('--overwrite', action='store_true', help='Replace existing templates')

    def handle(self, *args, **options):
        created = updated = 0
        for template_type, (subject, body_html) in DEFAULT_TEMPLATES.items():
            existing = EmailTemplate.objects.filter(type=template_type).first()
            if existing is None:
                EmailTemplate.objects.create(
                    type=template_type,
                    name=template_type.replace('_', ' ').title(),
                    subject=subject,
                    body_html=body_html,
                )
                created += 1
            elif options['overwrite']:
                existing.subject = subject
                existing.body_html = body_html
                existing.save(update_fields=['subject', 'body_html', 'updated_at'])
                updated += 1

        self.stdout.write(self.style.SUCCESS(f'Email templates: {created} created, {updated} updated'))
