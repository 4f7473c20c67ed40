async def create_ai_course(client, **overrides):
    body = {
        "title": "ChatGPT Mastery",
        "heading": "From zero to hero",
        "aiTool": "ChatGPT",
        "tree": [{"level": 1, "topic": "Basics"}],
    }
    body.update(overrides)
    response = await client.post("/api/aiCourses", json=body)
    assert response.status_code == 201
    return response.json()["data"]


async def test_create_ai_course_requires_tree(client):
    response = await client.post(
        "/api/aiCourses",
        json={"title": "t", "heading": "h", "aiTool": "ChatGPT"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Title, heading, AI tool, and tree are required"


async def test_create_ai_course_defaults(client):
    course = await create_ai_course(client, subHeading="   ", certificateId="")

    assert course["type"] == "mastery"
    assert course["isActive"] is True
    assert "subHeading" not in course
    assert "certificateId" not in course
    level = course["tree"][0]
    assert level == {
        "level": 1,
        "topic": "Basics",
        "lessons": [],
        "canRead": True,
        "canListen": True,
        "promptIds": [],
    }


async def test_ai_course_populates_tree(client):
    course = await create_ai_course(client)
    lesson = await client.post(
        "/api/aiLessons",
        json={"aiCourseId": course["_id"], "title": "Prompt basics", "content": "..."},
    )
    prompt = await client.post(
        "/api/prompts",
        json={
            "category": "Writing",
            "prompt": "Write a haiku",
            "tool": "ChatGPT",
            "title": "Haiku",
            "subHeading": "Short poems",
        },
    )
    lesson_id = lesson.json()["data"]["_id"]
    prompt_id = prompt.json()["data"]["_id"]

    await client.put(
        f"/api/aiCourses/{course['_id']}",
        json={"tree": [{"level": 1, "topic": "Basics", "lessons": [lesson_id], "promptIds": [prompt_id]}]},
    )
    response = await client.get(f"/api/aiCourses/{course['_id']}")

    level = response.json()["data"]["tree"][0]
    assert level["lessons"][0]["title"] == "Prompt basics"
    assert level["promptIds"][0]["title"] == "Haiku"


async def test_ai_course_search_escapes_regex(client):
    await create_ai_course(client, title="C++ for AI")
    await create_ai_course(client, title="Python for AI")

    response = await client.get("/api/aiCourses", params={"search": "c++"})

    body = response.json()
    assert [c["title"] for c in body["data"]] == ["C++ for AI"]
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "totalPages": 1}


async def test_update_ai_course_clears_optional_text(client):
    course = await create_ai_course(client, category="Writing")

    response = await client.put(f"/api/aiCourses/{course['_id']}", json={"category": "", "title": None})

    data = response.json()["data"]
    assert "category" not in data
    assert data["title"] == "ChatGPT Mastery"


async def test_ai_course_not_found(client, object_id):
    assert (await client.get(f"/api/aiCourses/{object_id}")).json()["error"] == "AI Course not found"
    assert (await client.delete(f"/api/aiCourses/{object_id}")).status_code == 404


async def test_ai_lesson_crud(client):
    course = await create_ai_course(client)

    missing = await client.post("/api/aiLessons", json={"title": "t", "content": "c"})
    created = await client.post(
        "/api/aiLessons",
        json={
            "aiCourseId": course["_id"],
            "title": "t",
            "content": "c",
            "questions": [{"question": "q", "options": ["a", "b"], "correctAnswer": 0, "explanation": "a"}],
        },
    )
    lesson_id = created.json()["data"]["_id"]
    fetched = await client.get(f"/api/aiLessons/{lesson_id}")
    listed = await client.get("/api/aiLessons", params={"aiCourseId": course["_id"]})
    deleted = await client.delete(f"/api/aiLessons/{lesson_id}")

    assert missing.status_code == 400
    assert missing.json()["error"] == "aiCourseId, title, and content are required"
    assert created.json()["data"]["questions"][0]["correctAnswer"] == 0
    assert fetched.json()["data"]["aiCourseId"]["title"] == "ChatGPT Mastery"
    assert listed.json()["pagination"]["total"] == 1
    assert deleted.json()["message"] == "AI Lesson deleted successfully"
    assert (await client.get(f"/api/aiLessons/{lesson_id}")).status_code == 404
