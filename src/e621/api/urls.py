"""
Media URL reconstruction.

The API returns null media URLs for posts hidden from the requesting user
(e.g. anonymous requests for blacklisted-by-default content). The static
file layout is derived from the md5, so the URLs can be rebuilt locally.
"""

from dataclasses import replace

from ..config import API
from .models import NullableURLPost, ResolvedPost


def construct_url_from_md5(md5: str, ext: str = "png", preview: bool = False) -> str:
    """
    Build the static URL for a file.

    Args:
        md5: File md5; only the first four characters pick the directory.
        ext: File extension, without the dot.
        preview: Point at the preview directory instead of the original.

    Returns:
        Absolute https URL.
    """
    prefix = "/data/preview" if preview else "/data"
    return f"https://{API.static_host}{prefix}/{md5[0:2]}/{md5[2:4]}/{md5}.{ext}"


def fix_url(post: NullableURLPost) -> ResolvedPost:
    """
    Return a copy of ``post`` with every null media URL filled in.

    URLs already present are kept, so applying this twice changes nothing.
    """
    md5, ext = post.file.md5, post.file.ext
    file, preview, sample = post.file, post.preview, post.sample

    if file.url is None:
        file = replace(file, url=construct_url_from_md5(md5, ext))
    if preview.url is None:
        preview = replace(preview, url=construct_url_from_md5(md5, ext, preview=True))
    if sample.url is None:
        sample = replace(sample, url=construct_url_from_md5(md5, ext))

    if file is post.file and preview is post.preview and sample is post.sample:
        return post
    return replace(post, file=file, preview=preview, sample=sample)
