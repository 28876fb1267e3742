from safeshortener.dao.base.record_base_dao import RecordBaseDAO, RecordMutator, RecordVisitor


__all__ = [
    'RecordBaseDAO',
    'RecordMutator',
    'RecordVisitor',
]
