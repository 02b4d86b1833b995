import csv
import io

from .models import Kiosk

KIOSK_EXPORT_HEADERS = [
    'ID', 'Name', 'Location', 'Address', 'City', 'State',
    'Traffic Level', 'Base Rate', 'Price', 'Status', 'Created At',
]


def export_kiosks_csv(queryset=None):
    kiosks = queryset if queryset is not None else Kiosk.objects.order_by('-created_at')
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(KIOSK_EXPORT_HEADERS)
    for kiosk in kiosks:
        writer.writerow([
            kiosk.pk, kiosk.name, kiosk.location, kiosk.address, kiosk.city, kiosk.state,
            kiosk.traffic_level, kiosk.base_rate, kiosk.price, kiosk.status,
            kiosk.created_at.isoformat(),
        ])
    return buffer.getvalue()
