"""
RouteDescriptor model.

The fixed table of operation shapes exposed by the facade.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict


class RouteDescriptor(BaseModel):
    """
    One supported operation shape (method + path template).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    method: str
    path: str
    params: Tuple[str, ...]


DB_PATH = "/{dbname}"
DOC_PATH = "/{dbname}/{docid}"
ATTACHMENT_PATH = "/{dbname}/{docid}/{attname}"

ROUTES: Tuple[RouteDescriptor, ...] = (
    RouteDescriptor(name="create_database", method="PUT", path=DB_PATH, params=("dbname",)),
    RouteDescriptor(name="get_database", method="GET", path=DB_PATH, params=("dbname",)),
    RouteDescriptor(name="delete_database", method="DELETE", path=DB_PATH, params=("dbname",)),
    RouteDescriptor(
        name="put_document", method="PUT", path=DOC_PATH, params=("dbname", "docid")
    ),
    RouteDescriptor(
        name="get_document", method="GET", path=DOC_PATH, params=("dbname", "docid")
    ),
    RouteDescriptor(
        name="put_attachment",
        method="PUT",
        path=ATTACHMENT_PATH,
        params=("dbname", "docid", "attname"),
    ),
    RouteDescriptor(
        name="get_attachment",
        method="GET",
        path=ATTACHMENT_PATH,
        params=("dbname", "docid", "attname"),
    ),
)
