import os

from qa_forum import create_app, db
from qa_forum.models import Question, Answer, QuestionVote, AnswerVote


app = create_app()

debug_mode = os.environ.get("FLASK_DEBUG", "0").lower() in {"true", "1", "t", "yes", "y"}


@app.shell_context_processor
def make_shell_context():
    return {
        "db": db,
        "Question": Question,
        "Answer": Answer,
        "QuestionVote": QuestionVote,
        "AnswerVote": AnswerVote,
    }


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "4000")), debug=debug_mode)
