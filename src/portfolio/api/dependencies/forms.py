"""Project form field dependency.

Upload staging depends on this, so a malformed text field fails the request
before any file is written to the upload directory.
"""

from typing import Annotated

from fastapi import Depends, Form

OptionalForm = Annotated[str | None, Form()]


def project_form_fields(
    title: OptionalForm = None,
    description1: OptionalForm = None,
    description2: OptionalForm = None,
    project_type: Annotated[str | None, Form(alias="projectType")] = None,
    project_area: Annotated[str | None, Form(alias="projectArea")] = None,
    project_location: Annotated[str | None, Form(alias="projectLocation")] = None,
) -> dict[str, str | None]:
    """Collect the text fields keyed by model attribute."""
    return {
        "title": title,
        "description1": description1,
        "description2": description2,
        "project_type": project_type,
        "project_area": project_area,
        "project_location": project_location,
    }


ProjectFormFields = Annotated[dict[str, str | None], Depends(project_form_fields)]
