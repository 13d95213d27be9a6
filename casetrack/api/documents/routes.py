# casetrack/api/documents/routes.py
import base64
import binascii
import logging
from io import BytesIO

from flask import Blueprint, jsonify, request, g, send_file

from casetrack.models import Document, JudicialProcess
from casetrack.core.constants import DocumentStatus
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.repository import TenantScopedRepository
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import DocumentUpdateSchema, DocumentUploadSchema

logger = logging.getLogger(__name__)
documents_bp = Blueprint("documents", __name__)

documents = TenantScopedRepository(Document)
processes = TenantScopedRepository(JudicialProcess)
upload_schema = DocumentUploadSchema()
update_schema = DocumentUpdateSchema()


def decode_file_data(raw: str) -> bytes:
    """Decode a base64 payload, accepting the ``data:<mime>;base64,`` prefix browsers send"""
    if raw.startswith("data:") and "," in raw:
        raw = raw.split(",", 1)[1]
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        raise APIError("file_data is not valid base64", status_code=400)


@documents_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def list_documents():
    filters = {"status": DocumentStatus.ACTIVE.value}
    judicial_process_id = request.args.get("judicial_process_id")
    if judicial_process_id:
        filters["judicial_process_id"] = judicial_process_id

    result = documents.list(g.tenant_id, order_by=(Document.created_at.desc(),), **filters)
    return jsonify([document.to_dict() for document in result])


@documents_bp.route("/<document_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def get_document(document_id):
    return jsonify(documents.get_or_404(g.tenant_id, document_id, "Document not found").to_dict())


@documents_bp.route("/<document_id>/download", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def download_document(document_id):
    document = documents.get_or_404(g.tenant_id, document_id, "Document not found")
    if document.status == DocumentStatus.DELETED.value:
        raise APIError("Document not found", status_code=404)

    return send_file(
        BytesIO(document.file_data),
        mimetype=document.file_type or "application/octet-stream",
        as_attachment=True,
        download_name=document.file_name,
    )


@documents_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def upload_document():
    data = load_or_400(upload_schema)
    if not processes.exists(g.tenant_id, id=data["judicial_process_id"]):
        raise APIError("Judicial process not found", status_code=400)

    content = decode_file_data(data.pop("file_data"))
    document = documents.create(
        g.tenant_id,
        file_data=content,
        file_size=len(content),
        **data,
    )

    logger.info(f"Stored document {document.id} ({document.file_size} bytes)")
    return jsonify({"message": "Document uploaded successfully", "document": document.to_dict()}), 201


@documents_bp.route("/<document_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_document(document_id):
    document = documents.get_or_404(g.tenant_id, document_id, "Document not found")
    data = load_or_400(update_schema, partial=True)
    documents.update(g.tenant_id, document, **data)
    return jsonify({"message": "Document updated", "document": document.to_dict()})


@documents_bp.route("/<document_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_document(document_id):
    documents.update(g.tenant_id, document_id, status=DocumentStatus.DELETED.value)
    return jsonify({"message": "Document deleted"})
