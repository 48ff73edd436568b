"""
Low-level S3 primitive operations.

Provides the base class for all S3 interactions used by a deploy:
paginated bucket listing, single-object put and single-object delete.
"""
from typing import List

from botocore.exceptions import BotoCoreError, ClientError

from ...exceptions import RemoteDeleteError, RemoteListError, RemoteWriteError
from ...models.remote_object import RemoteObject
from ...utils.content_types import content_type
from ...utils.logger import get_logger

log = get_logger(__name__)

# Error codes that mean the object is already gone
_NOT_FOUND_CODES = {'NoSuchKey', 'NotFound', '404'}


class S3Operations:
    """Base class providing primitive S3 operations.

    The S3 client is constructed by the caller and injected here, so the
    same instance is shared by listing, uploads and deletes.

    Args:
        s3_client: botocore S3 client (or anything with the same methods)
        bucket_name: Destination bucket name
    """

    def __init__(self, s3_client, bucket_name):
        self.s3_client = s3_client
        self.bucket_name = bucket_name

    def list_objects(self) -> List[RemoteObject]:
        """List every object in the bucket.

        Uses the 'list_objects' paginator, which continues each truncated
        page from the key of its last object (or the returned NextMarker).

        Returns:
            Flat list of :class:`RemoteObject`

        Raises:
            RemoteListError: If a page request fails or returns nothing
        """
        objects = []

        try:
            paginator = self.s3_client.get_paginator('list_objects')
            for page in paginator.paginate(Bucket=self.bucket_name):
                if page is None:
                    raise RemoteListError(
                        f"Empty listing response for s3://{self.bucket_name}"
                    )
                contents = page.get('Contents') or []
                objects.extend(RemoteObject.from_s3(item) for item in contents)
        except (ClientError, BotoCoreError) as e:
            raise RemoteListError(f"Error listing s3://{self.bucket_name}: {e}") from e

        log.debug("Found %d object(s) in s3://%s", len(objects), self.bucket_name)
        return objects

    def put_object(self, key, data):
        """Upload one object, publicly readable, with a derived Content-Type.

        Args:
            key: S3 object key
            data: Object body

        Returns:
            True if successful

        Raises:
            RemoteWriteError: On any transport or API error
        """
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                ACL='public-read',
                ContentType=content_type(key),
                Key=key,
                Body=data,
            )
        except (ClientError, BotoCoreError) as e:
            raise RemoteWriteError(f"Error uploading s3://{self.bucket_name}/{key}: {e}") from e
        return True

    def delete_object(self, key):
        """Delete one object. An already-missing key counts as deleted.

        Args:
            key: S3 object key

        Returns:
            True if successful

        Raises:
            RemoteDeleteError: On any transport or API error other than "not found"
        """
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            code = str(e.response.get('Error', {}).get('Code', ''))
            if code in _NOT_FOUND_CODES:
                log.debug("s3://%s/%s already absent", self.bucket_name, key)
                return True
            raise RemoteDeleteError(f"Error deleting s3://{self.bucket_name}/{key}: {e}") from e
        except BotoCoreError as e:
            raise RemoteDeleteError(f"Error deleting s3://{self.bucket_name}/{key}: {e}") from e
        return True
