from datetime import datetime

from staycore_backend.extensions import db

PRIORITIES = ('urgent', 'normal', 'low')
STATUSES = ('submitted', 'in_progress', 'completed')


class MaintenanceRequest(db.Model):
    __tablename__ = "maintenance_requests"

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=False, index=True)

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(20), default='normal')  # urgent, normal, low
    status = db.Column(db.String(50), default='submitted')  # submitted, in_progress, completed
    assigned_to = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    completed_at = db.Column(db.DateTime, nullable=True)

    def __repr__(self):
        return f'<MaintenanceRequest {self.id}: {self.title} - {self.status}>'

    def serialize(self):
        return {
            "id": self.id,
            "room_id": self.room_id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "assigned_to": self.assigned_to,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "room_number": self.room.number if self.room else None,
        }

    def mark_in_progress(self):
        self.status = 'in_progress'

    def complete(self):
        """Mark maintenance request as completed"""
        self.status = 'completed'
        self.completed_at = datetime.utcnow()
