from apps.messaging.models import Message
from apps.notifications.services.create_notifications import notify_user


def is_conversation_member(job, user):
    """Client, assigned freelancer, or anyone who applied to the job."""
    if not user or not user.is_authenticated:
        return False
    if job.is_party(user):
        return True
    return job.applications.filter(freelancer=user).exists()


def post_message(job, sender, content):
    message = Message.objects.create(job=job, sender=sender, content=content)

    recipient = job.freelancer if sender.id == job.client_id else job.client
    if recipient is not None and recipient.id != sender.id:
        notify_user(
            recipient=recipient,
            notif_type="NEW_MESSAGE",
            title="New message",
            message=content[:140],
            data={"jobId": job.id, "messageId": message.id},
        )
    return message
