"""create questions, answers and vote ledger tables

Revision ID: a1f3c9e2b7d4
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1f3c9e2b7d4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'questions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'answers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.String(length=300), nullable=False),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_answers_question_id', 'answers', ['question_id'], unique=False)

    # no unique constraint on the subject: voting is anonymous and unlimited
    op.create_table(
        'question_votes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.SmallInteger(), nullable=False),
        sa.CheckConstraint('value in (1, -1)', name='ck_question_vote_value'),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_question_votes_question_id', 'question_votes', ['question_id'], unique=False)

    op.create_table(
        'answer_votes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('answer_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.SmallInteger(), nullable=False),
        sa.CheckConstraint('value in (1, -1)', name='ck_answer_vote_value'),
        sa.ForeignKeyConstraint(['answer_id'], ['answers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_answer_votes_answer_id', 'answer_votes', ['answer_id'], unique=False)


def downgrade():
    op.drop_index('ix_answer_votes_answer_id', table_name='answer_votes')
    op.drop_table('answer_votes')

    op.drop_index('ix_question_votes_question_id', table_name='question_votes')
    op.drop_table('question_votes')

    op.drop_index('ix_answers_question_id', table_name='answers')
    op.drop_table('answers')

    op.drop_table('questions')
