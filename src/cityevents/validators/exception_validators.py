from sqlalchemy import inspect as sa_inspect


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return the kwarg keys that are not mapped attributes of `model`.
    - model: the SQLAlchemy model class (not instance)
    - kwargs: dict of incoming kwargs to validate
    """
    mapper = sa_inspect(model)
    # mapper.attrs includes columns and relationships (City(events=[...]) is legal)
    allowed = {attr.key for attr in mapper.attrs}
    return [k for k in kwargs.keys() if k not in allowed]


def get_required_columns(model) -> list[str]:
    """
    Columns that are NOT NULL and have no server/default and are not simple auto PKs.
    """
    cols = []
    for col in model.__table__.columns:
        has_default = col.default is not None or col.server_default is not None
        # integer PKs are autoincrement="auto" unless set explicitly
        is_auto_pk = col.primary_key and col.autoincrement in (True, "auto")
        if not col.nullable and not has_default and not is_auto_pk:
            cols.append(col.name)
    return cols


def resolve_column_kwargs(model, kwargs: dict) -> dict:
    """
    Translate relationship kwargs into the FK column names they satisfy.

    `Event(city=<City>)` fills `city_id` at flush time, so `city_id` must not be
    reported as missing when the caller passes the relationship instead.
    """
    mapper = sa_inspect(model)
    resolved = dict(kwargs)
    for rel in mapper.relationships:
        if kwargs.get(rel.key) is None:
            continue
        for col in rel.local_columns:
            resolved.setdefault(col.name, kwargs[rel.key])
    return resolved
