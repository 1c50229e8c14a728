from django.core.management.base import BaseCommand

from sales.services import mark_overdue


class Command(BaseCommand):
    help = "Marca como atrasados los pagos pendientes cuya fecha de vencimiento ya pasó."

    def handle(self, *args, **options):
        updated = mark_overdue()
        self.stdout.write(self.style.SUCCESS(f"{updated} pagos marcados como atrasados."))
