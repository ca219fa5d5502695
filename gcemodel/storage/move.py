"""
Move a Cloud Storage object between buckets: copy, then delete the original.
"""
from typing import Optional

import click
from google.cloud import storage
from google.cloud.exceptions import NotFound


def move_object(
    project_id: str,
    source_bucket_name: str,
    object_name: str,
    target_bucket_name: str,
    client: Optional[storage.Client] = None,
) -> storage.Blob:
    """
    Move ``object_name`` from one bucket to another and return the new blob.

    The copy keeps the object name; use the same bucket with a different name
    to rename instead. A missing source object raises
    ``google.cloud.exceptions.NotFound`` and nothing is deleted.
    """
    client = client or storage.Client(project=project_id)
    source_bucket = client.bucket(source_bucket_name)
    target_bucket = client.bucket(target_bucket_name)

    blob = source_bucket.get_blob(object_name)
    if blob is None:
        # get_blob returns None rather than raising for a missing object
        raise NotFound(f"gs://{source_bucket_name}/{object_name} does not exist")

    copied = source_bucket.copy_blob(blob, target_bucket, object_name)
    blob.delete()

    click.echo(
        f"Moved object {object_name} from bucket {source_bucket_name} "
        f"to {copied.bucket.name}"
    )
    return copied
