from .rooms import available_count, change_room_status, get_room, occupancy_report
from .guests import (
    check_in_guest,
    create_guest,
    get_guest,
    list_guests,
    mark_guest_moved_out,
    mark_payment_received,
    overdue,
    payments_due,
    payments_due_this_week,
    payments_due_today,
    refresh_payment_statuses,
    retry_room_cleanup,
    update_guest,
)
from .reports import dashboard_summary, financial_report, maintenance_report
