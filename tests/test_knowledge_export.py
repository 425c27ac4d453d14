"""
Tests for interview export, knowledge ingestion and background embeddings.
"""
from conftest import FakeEmbeddingProvider, FailingEmbeddingProvider
from interview_capture.db.models.knowledge import KnowledgeArtifact, KnowledgeChunk, Embedding
from interview_capture.services import embedding_service
from interview_capture.services.embedding_service import run_embedding_job


def _answer(client, headers, session_id, question, answer):
    response = client.post(
        "/interview-responses",
        data={"session_id": str(session_id), "question": question, "response": answer},
        headers=headers,
    )
    assert response.status_code == 201, response.text


def test_export_returns_markdown_attachment(client, admin_headers, session, fake_embeddings):
    _answer(client, admin_headers, session["id"], "Which systems do you open first?", "ERP")

    response = client.get(f"/interview-export/{session['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/markdown")
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="Interview__Month_end_close___Accountant___')
    assert disposition.endswith('.md"')
    assert response.text.startswith("# Interview: Month-end close")
    assert "### Question 1: Which systems do you open first?" in response.text


def test_export_creates_artifact_chunks_and_embeddings(client, admin_headers, session, fake_embeddings, db):
    _answer(client, admin_headers, session["id"], "Which systems do you open first?", "ERP")

    client.get(f"/interview-export/{session['id']}", headers=admin_headers)

    artifact = db.query(KnowledgeArtifact).one()
    assert artifact.type == "MARKDOWN"
    assert artifact.role_id == session["role_id"]
    assert artifact.description == "Exported interview for Month-end close"
    assert artifact.extra_metadata["session_id"] == session["id"]
    assert artifact.extra_metadata["embedding_status"] == "completed"

    chunks = db.query(KnowledgeChunk).filter(KnowledgeChunk.artifact_id == artifact.id).all()
    assert len(chunks) == 1
    assert chunks[0].chunk_index == 0
    assert chunks[0].extra_metadata["artifact_title"] == artifact.title
    assert db.query(Embedding).count() == 1
    assert len(fake_embeddings.calls) == 1


def test_reexport_overwrites_single_artifact(client, admin_headers, session, fake_embeddings, db):
    _answer(client, admin_headers, session["id"], "Which systems do you open first?", "ERP")
    client.get(f"/interview-export/{session['id']}", headers=admin_headers)

    long_answer = " ".join(f"step{i}" for i in range(1200))
    _answer(client, admin_headers, session["id"], "Who signs off?", long_answer)
    response = client.get(f"/interview-export/{session['id']}", headers=admin_headers)

    assert response.status_code == 200
    artifacts = db.query(KnowledgeArtifact).all()
    assert len(artifacts) == 1
    assert "step1199" in artifacts[0].content

    chunks = (
        db.query(KnowledgeChunk)
        .filter(KnowledgeChunk.artifact_id == artifacts[0].id)
        .order_by(KnowledgeChunk.chunk_index)
        .all()
    )
    assert len(chunks) > 1
    assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
    assert db.query(KnowledgeChunk).count() == len(chunks)
    assert db.query(Embedding).count() == len(chunks)


def test_export_succeeds_when_embeddings_fail(client, admin_headers, session, failing_embeddings, db):
    _answer(client, admin_headers, session["id"], "Which systems do you open first?", "ERP")

    response = client.get(f"/interview-export/{session['id']}", headers=admin_headers)

    assert response.status_code == 200
    artifact = db.query(KnowledgeArtifact).one()
    assert artifact.extra_metadata["embedding_status"] == "failed"
    assert "embedding service unavailable" in artifact.extra_metadata["embedding_error"]
    assert db.query(KnowledgeChunk).count() == 1
    assert db.query(Embedding).count() == 0


def test_export_of_empty_session(client, admin_headers, session, fake_embeddings):
    response = client.get(f"/interview-export/{session['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert "_No responses recorded yet._" in response.text


def test_export_other_company_session(client, session, other_company_headers, db):
    response = client.get(f"/interview-export/{session['id']}", headers=other_company_headers)

    assert response.status_code == 404
    assert db.query(KnowledgeArtifact).count() == 0


def test_embedding_job_for_missing_artifact_does_not_raise(fake_embeddings):
    run_embedding_job(424242)


def test_list_and_get_artifacts(client, admin_headers, session, fake_embeddings, other_company_headers):
    _answer(client, admin_headers, session["id"], "Which systems do you open first?", "ERP")
    client.get(f"/interview-export/{session['id']}", headers=admin_headers)

    listing = client.get("/knowledge-artifacts", headers=admin_headers)
    assert listing.status_code == 200
    assert len(listing.json()) == 1
    summary = listing.json()[0]
    assert summary["chunk_count"] == 1
    assert summary["metadata"]["embedding_status"] == "completed"

    detail = client.get(f"/knowledge-artifacts/{summary['id']}", headers=admin_headers)
    assert detail.status_code == 200
    assert detail.json()["content"].startswith("# Interview:")
    assert detail.json()["chunks"][0]["has_embedding"] is True

    assert client.get("/knowledge-artifacts", headers=other_company_headers).json() == []
    assert client.get(f"/knowledge-artifacts/{summary['id']}", headers=other_company_headers).status_code == 404


def test_regenerate_embeddings_admin_only(client, admin_headers, employee_headers, session, failing_embeddings, monkeypatch, db):
    client.get(f"/interview-export/{session['id']}", headers=admin_headers)
    artifact_id = db.query(KnowledgeArtifact).one().id

    forbidden = client.post(f"/knowledge-artifacts/{artifact_id}/embeddings", headers=employee_headers)
    assert forbidden.status_code == 403

    monkeypatch.setattr(embedding_service, "get_embedding_provider", FakeEmbeddingProvider)

    accepted = client.post(f"/knowledge-artifacts/{artifact_id}/embeddings", headers=admin_headers)
    assert accepted.status_code == 202

    db.expire_all()
    artifact = db.query(KnowledgeArtifact).one()
    assert artifact.extra_metadata["embedding_status"] == "completed"
    assert "embedding_error" not in artifact.extra_metadata
    assert db.query(Embedding).count() == 1


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"


def test_failed_retry_clears_earlier_success_counts(client, admin_headers, session, fake_embeddings, monkeypatch, db):
    client.get(f"/interview-export/{session['id']}", headers=admin_headers)
    artifact_id = db.query(KnowledgeArtifact).one().id
    assert db.query(KnowledgeArtifact).one().extra_metadata["embedded_chunks"] == 1

    monkeypatch.setattr(embedding_service, "get_embedding_provider", FailingEmbeddingProvider)
    response = client.post(f"/knowledge-artifacts/{artifact_id}/embeddings", headers=admin_headers)
    assert response.status_code == 202

    db.expire_all()
    metadata = db.query(KnowledgeArtifact).one().extra_metadata
    assert metadata["embedding_status"] == "failed"
    assert "embedded_chunks" not in metadata
    assert metadata["embedding_error"] == "embedding service unavailable"
