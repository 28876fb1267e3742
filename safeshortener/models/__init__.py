from safeshortener.models.record_model import RecordModel


__all__ = ['RecordModel']
