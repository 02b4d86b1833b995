from .services import log_admin_action


class AuditedModelMixin:
    """Writes an audit entry for every create, update and delete.

    Set ``audit_resource`` to the resource type recorded in the log.
    """

    audit_resource = None

    def _audit(self, verb, pk, details=None):
        log_admin_action(self.request.user, f'{verb}_{self.audit_resource}', self.audit_resource, pk, details)

    def perform_create(self, serializer):
        instance = serializer.save()
        self._audit('create', instance.pk)

    def perform_update(self, serializer):
        instance = serializer.save()
        self._audit('update', instance.pk, {'fields': sorted(serializer.validated_data)})

    def perform_destroy(self, instance):
        pk = instance.pk
        instance.delete()
        self._audit('delete', pk)
