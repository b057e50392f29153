"""Per-artifact view models derived from a TableSchema.

Each builder is an independent pure projection of the schema; none of them
shares state with another.
"""
from typing import Any, Callable, Dict, List

from crudgen.core.naming import NamingVariants, naming_variants
from crudgen.core.rules import annotate, is_meta_column
from crudgen.models.schema import Column, TableSchema

ViewModel = Dict[str, Any]


def _user_fields(schema: TableSchema) -> List[Dict[str, Any]]:
    return [
        {
            'name': column.name,
            'type': column.semantic_type.value,
            'is_optional': column.is_optional,
        }
        for column in schema.columns
        if not is_meta_column(column)
    ]


def unique_columns(columns: List[Column]) -> List[Column]:
    """Drop repeated column names, keeping the first definition."""
    seen = set()
    unique = []
    for column in columns:
        if column.name not in seen:
            seen.add(column.name)
            unique.append(column)
    return unique


def _names(schema: TableSchema) -> NamingVariants:
    return naming_variants(schema.table_name)


def build_dto_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'class_name': f"{names.singular_class_name}Dto",
        'columns': _user_fields(schema),
    }


def build_request_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'class_name': f"{names.singular_class_name}Request",
        'columns': _user_fields(schema),
        'dashed_file_name': names.singular_file_name,
    }


def build_response_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'class_name': f"{names.singular_class_name}Response",
        'dto_class_name': f"{names.singular_class_name}Dto",
        'dashed_file_name': names.singular_file_name,
    }


def build_list_response_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'class_name': f"{names.plural_class_name}ListResponse",
        'response_dto_class_name': f"{names.singular_class_name}Dto",
        'dashed_file_name': names.singular_file_name,
        'dashed_file_name_plural': names.plural_file_name,
    }


def build_controller_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'class_name': f"{names.plural_class_name}Controller",
        'handler_class_name': f"{names.plural_class_name}Handler",
        'request_class_name': f"{names.singular_class_name}Request",
        'dto_class_name': f"{names.singular_class_name}Dto",
        'response_class_name': f"{names.singular_class_name}Response",
        'list_response_class_name': f"{names.plural_class_name}ListResponse",
        'dashed_file_name': names.singular_file_name,
        'dashed_file_name_plural': names.plural_file_name,
        'route_name': names.plural_class_name.lower(),
    }


def build_handler_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'class_name': f"{names.plural_class_name}Handler",
        'db_service_class_name': f"{names.plural_class_name}DbService",
        'dto_class_name': f"{names.singular_class_name}Dto",
        'dashed_file_name': names.singular_file_name,
        'dashed_file_name_plural': names.plural_file_name,
    }


def build_db_service_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'class_name': f"{names.plural_class_name}DbService",
        'dto_class_name': f"{names.singular_class_name}Dto",
        'not_found_error_class_name': f"{names.singular_class_name}NotFoundError",
        'dashed_file_name': names.singular_file_name,
        'dashed_file_name_plural': names.plural_file_name,
        'plural_class_name': names.plural_class_name,
    }


def build_not_found_error_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'class_name': names.singular_class_name,
        'lower_case_class_name': names.singular_file_name,
        'upper_case_class_name': names.upper_case_constant,
    }


def build_constants_view(schema: TableSchema) -> ViewModel:
    return {'upper_case_class_name': _names(schema).upper_case_constant}


def build_module_view(schema: TableSchema) -> ViewModel:
    names = _names(schema)
    return {
        'plural_class_name': names.plural_class_name,
        'dashed_file_name_plural': names.plural_file_name,
    }


def build_persistence_model_view(schema: TableSchema) -> ViewModel:
    """Prisma model view: every column, annotated, plus relations and indexes."""
    columns = []
    for column in unique_columns(schema.columns):
        annotation = annotate(column)
        columns.append({
            'name': column.name,
            'type': column.persistence_type.value,
            'is_id': annotation.is_id,
            'is_optional': column.is_optional,
            'db_specific': annotation.db_specific,
            'length': column.length,
        })

    return {
        'model_name': _names(schema).plural_class_name,
        'columns': columns,
        'relations': [r.model_dump(mode='json') for r in schema.relations],
        'indexes': [i.model_dump(mode='json') for i in schema.indexes],
    }


VIEW_MODEL_BUILDERS: Dict[str, Callable[[TableSchema], ViewModel]] = {
    'dto': build_dto_view,
    'request': build_request_view,
    'response': build_response_view,
    'list_response': build_list_response_view,
    'controller': build_controller_view,
    'handler': build_handler_view,
    'db_service': build_db_service_view,
    'not_found_error': build_not_found_error_view,
    'constants': build_constants_view,
    'module': build_module_view,
    'persistence_model': build_persistence_model_view,
}


def build_view_models(schema: TableSchema) -> Dict[str, ViewModel]:
    """Build the view model of every artifact."""
    return {key: builder(schema) for key, builder in VIEW_MODEL_BUILDERS.items()}
