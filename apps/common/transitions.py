from .exceptions import InvalidTransition


class StatusTransitionMixin:
    """Guards a status field against moves outside ``TRANSITIONS``.

    ``TRANSITIONS`` maps each status to the statuses reachable from it;
    statuses missing from the map are terminal.
    """

    TRANSITIONS = {}
    status_field = 'status'

    @property
    def current_status(self):
        return getattr(self, self.status_field)

    def can_transition_to(self, new_status):
        return new_status in self.TRANSITIONS.get(self.current_status, ())

    def transition_to(self, new_status):
        if not self.can_transition_to(new_status):
            raise InvalidTransition(self._meta.verbose_name, self.current_status, new_status)
        setattr(self, self.status_field, new_status)

    def save(self, *args, **kwargs):
        if self.pk:  # Updating existing
            stored = type(self).objects.filter(pk=self.pk).values_list(self.status_field, flat=True).first()
            if stored is not None and stored != self.current_status:
                if self.current_status not in self.TRANSITIONS.get(stored, ()):
                    raise InvalidTransition(self._meta.verbose_name, stored, self.current_status)
        super().save(*args, **kwargs)
