import pandera as pa


class GWRQADFModel(pa.DataFrameModel):
    """
    Base pandera model for the raw extracts. Extracts are read as text, so columns annotated with a non-text type are
    converted by the loader before validation.
    """

    @classmethod
    def fields_of_type(cls, field_type: type) -> list[str]:
        """Returns the column names annotated with field_type, parent models included, in declaration order."""
        names: dict[str, None] = {}
        for base in reversed(cls.__mro__):
            for field_name, annotation in getattr(base, "__annotations__", {}).items():
                if annotation is field_type or annotation == field_type.__name__:
                    names[field_name] = None
        return list(names)

    @classmethod
    def boolean_fields(cls) -> list[str]:
        return cls.fields_of_type(bool)
