"""Unit tests for CommentService."""

from datetime import timedelta

import pytest

from agora.domain.error import (
    DepthExceededError,
    ForbiddenError,
    NotAuthorizedError,
    NotFoundError,
    ParentNotFoundError,
    ParentWrongProjectError,
    ValidationFailedError,
)
from agora.domain.repository import (
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from agora.domain.service import CommentService, ToggleService
from agora.domain.value import CommentSortOrder, CounterName, ProjectId, TargetType
from tests.conftest import make_comment, make_project, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

TOMBSTONE = "[Comment deleted]"


class TestNormalizeContent:
    """Tests for normalize_content method."""

    @pytest.mark.asyncio
    async def test_trims_and_collapses_blank_lines(self, unit_env):
        """Surrounding whitespace is trimmed and 3+ newlines become 2."""
        comment_service = await unit_env.get(CommentService)

        assert (
            comment_service.normalize_content("  first\n\n\n\n\nsecond \n")
            == "first\n\nsecond"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\n\t", "x" * 2001])
    async def test_rejects_out_of_bounds_content(self, unit_env, content):
        """Blank or oversized content is rejected after trimming."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationFailedError):
            comment_service.normalize_content(content)

    @pytest.mark.asyncio
    async def test_accepts_maximum_length(self, unit_env):
        """Exactly the maximum length is allowed."""
        comment_service = await unit_env.get(CommentService)

        assert len(comment_service.normalize_content("x" * 2000)) == 2000

    @pytest.mark.asyncio
    async def test_length_is_checked_before_collapsing(self, unit_env):
        """Blank-line runs count toward the limit even though they collapse."""
        comment_service = await unit_env.get(CommentService)
        content = "a" + "\n" * 10 + "b" * 1995

        with pytest.raises(ValidationFailedError):
            comment_service.normalize_content(content)


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_top_level_comment_increments_project_count(self, unit_env):
        """A top-level comment sits at depth 0 and counts on the project."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)

        # Act
        comment = await comment_service.create_comment(
            user.id, project.id, "  Nice work  "
        )

        # Assert
        assert comment.depth == 0
        assert comment.parent_id is None
        assert comment.content == "Nice work"
        assert comment.is_active
        assert (await project_repo.find_by_id(project.id)).stats.comments == 1

    @pytest.mark.asyncio
    async def test_reply_increments_parent_and_project(self, unit_env):
        """A reply nests one level deeper and counts on parent and project."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user_repo = await unit_env.get(UserRepository)
        u1 = await make_user(user_repo)
        u2 = await make_user(user_repo)
        project = await make_project(project_repo, u1)
        c1 = await comment_service.create_comment(u1.id, project.id, "Nice work")

        # Act
        c2 = await comment_service.create_comment(
            u2.id, project.id, "Thanks for the feedback", parent_id=c1.id
        )

        # Assert
        assert c2.depth == 1
        assert c2.parent_id == c1.id
        assert (await comment_repo.find_by_id(c1.id)).stats.replies == 1
        assert (await project_repo.find_by_id(project.id)).stats.comments == 2

    @pytest.mark.asyncio
    async def test_depth_bound_is_enforced(self, unit_env):
        """Replies are accepted down to the maximum depth and rejected below it."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)

        parent = await comment_service.create_comment(user.id, project.id, "depth 0")
        for depth in range(1, comment_service.settings.max_depth + 1):
            parent = await comment_service.create_comment(
                user.id, project.id, f"depth {depth}", parent_id=parent.id
            )
        assert parent.depth == comment_service.settings.max_depth

        # Act & Assert
        with pytest.raises(DepthExceededError):
            await comment_service.create_comment(
                user.id, project.id, "too deep", parent_id=parent.id
            )
        assert (await comment_repo.find_by_id(parent.id)).stats.replies == 0
        assert (await project_repo.find_by_id(project.id)).stats.comments == 6

    @pytest.mark.asyncio
    async def test_missing_project_raises_not_found(self, unit_env):
        """Comments need an existing project."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))

        # Act & Assert
        with pytest.raises(NotFoundError, match="Project not found"):
            await comment_service.create_comment(
                user.id, ProjectId(user.id), "Orphan"
            )

    @pytest.mark.asyncio
    async def test_missing_parent_raises_parent_not_found(self, unit_env):
        """Replying to an unknown comment fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await comment_service.create_comment(
                user.id, project.id, "Reply", parent_id=user.id
            )

    @pytest.mark.asyncio
    async def test_deleted_parent_raises_parent_not_found(self, unit_env):
        """Replying to a tombstoned comment fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        parent = await make_comment(
            await unit_env.get(CommentRepository), project, user, is_active=False
        )

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await comment_service.create_comment(
                user.id, project.id, "Reply", parent_id=parent.id
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_project_rejected(self, unit_env):
        """A reply must stay on its parent's project."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        first = await make_project(project_repo, user, "First")
        second = await make_project(project_repo, user, "Second")
        parent = await comment_service.create_comment(user.id, first.id, "On first")

        # Act & Assert
        with pytest.raises(ParentWrongProjectError):
            await comment_service.create_comment(
                user.id, second.id, "On second", parent_id=parent.id
            )
        assert (await project_repo.find_by_id(second.id)).stats.comments == 0

    @pytest.mark.asyncio
    async def test_reply_rejected_when_parent_deleted_mid_write(
        self, unit_env, monkeypatch
    ):
        """A reply saved while its parent is being deleted is rolled back."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)
        parent = await comment_service.create_comment(user.id, project.id, "Parent")

        original_save = comment_repo.save
        saved_ids = []

        async def save_then_cascade(comment):
            saved = await original_save(comment)
            saved_ids.append(saved.id)
            # A concurrent delete tombstones the parent right after the insert
            await comment_repo.tombstone([parent.id], TOMBSTONE, saved.created_at)
            return saved

        monkeypatch.setattr(comment_repo, "save", save_then_cascade)

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await comment_service.create_comment(
                user.id, project.id, "Late reply", parent_id=parent.id
            )

        reply = await comment_repo.find_by_id(saved_ids[0])
        assert reply.is_active is False
        assert reply.content == TOMBSTONE
        assert (await comment_repo.find_by_id(parent.id)).stats.replies == 0
        assert (await project_repo.find_by_id(project.id)).stats.comments == 1

    @pytest.mark.asyncio
    async def test_reply_waits_for_concurrent_parent_delete(
        self, unit_env, monkeypatch
    ):
        """A reply whose parent lock is granted after a delete sees the tombstone."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)
        parent = await comment_service.create_comment(user.id, project.id, "Parent")

        original_lock = comment_repo.find_active_for_share

        async def lock_after_delete(comment_id):
            # The delete commits while the reply waits for the row lock
            await comment_service.delete_comment(user.id, parent.id)
            return await original_lock(comment_id)

        monkeypatch.setattr(comment_repo, "find_active_for_share", lock_after_delete)

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await comment_service.create_comment(
                user.id, project.id, "Late reply", parent_id=parent.id
            )

        assert await comment_repo.find_children(parent.id, include_inactive=True) == []
        assert (await comment_repo.find_by_id(parent.id)).stats.replies == 0
        assert (await project_repo.find_by_id(project.id)).stats.comments == 0


class TestEditComment:
    """Tests for edit_comment method."""

    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        """Editing replaces the content and marks the comment edited."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        comment = await comment_service.create_comment(user.id, project.id, "Draft")

        # Act
        edited = await comment_service.edit_comment(user.id, comment.id, " Final ")

        # Assert
        assert edited.content == "Final"
        assert edited.is_edited is True
        assert edited.edited_at is not None
        assert edited.updated_at >= comment.updated_at

    @pytest.mark.asyncio
    async def test_non_author_cannot_edit(self, unit_env):
        """Only the author may edit."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo)
        other = await make_user(user_repo)
        project = await make_project(await unit_env.get(ProjectRepository), author)
        comment = await comment_service.create_comment(author.id, project.id, "Mine")

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await comment_service.edit_comment(other.id, comment.id, "Hijacked")

    @pytest.mark.asyncio
    async def test_deleted_comment_cannot_be_edited(self, unit_env):
        """Tombstones are final."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        comment = await comment_service.create_comment(user.id, project.id, "Gone")
        await comment_service.delete_comment(user.id, comment.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.edit_comment(user.id, comment.id, "Back")


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    async def test_delete_cascades_to_replies(self, unit_env):
        """Deleting a comment tombstones it and its reply, and hides it from listings."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        toggle_service = await unit_env.get(ToggleService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user_repo = await unit_env.get(UserRepository)
        u1 = await make_user(user_repo)
        u2 = await make_user(user_repo)
        p1 = await make_project(project_repo, u1)
        c1 = await comment_service.create_comment(u1.id, p1.id, "Nice work")
        c2 = await comment_service.create_comment(
            u2.id, p1.id, "Thanks for the feedback", parent_id=c1.id
        )
        liked = await toggle_service.toggle_like(u2.id, c1.id, TargetType.COMMENT)
        assert liked.count == 1

        # Act
        result = await comment_service.delete_comment(u1.id, c1.id)

        # Assert
        assert result.tombstoned == 2
        stored_c1 = await comment_repo.find_by_id(c1.id)
        stored_c2 = await comment_repo.find_by_id(c2.id)
        assert stored_c1.is_active is False
        assert stored_c1.content == TOMBSTONE
        assert stored_c2.is_active is False
        assert stored_c2.content == TOMBSTONE
        assert (await project_repo.find_by_id(p1.id)).stats.comments == 0

        listing = await comment_service.list_comments(p1.id)
        assert c1.id not in [c.id for c in listing.items]

    @pytest.mark.asyncio
    async def test_cascade_decrements_only_direct_parent(self, unit_env):
        """Deleting mid-thread updates the direct parent and leaves subtree counters."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)
        root = await comment_service.create_comment(user.id, project.id, "root")
        middle = await comment_service.create_comment(
            user.id, project.id, "middle", parent_id=root.id
        )
        sibling = await comment_service.create_comment(
            user.id, project.id, "sibling", parent_id=root.id
        )
        leaf = await comment_service.create_comment(
            user.id, project.id, "leaf", parent_id=middle.id
        )

        # Act
        result = await comment_service.delete_comment(user.id, middle.id)

        # Assert
        assert result.tombstoned == 2
        assert (await comment_repo.find_by_id(root.id)).stats.replies == 1
        assert (await comment_repo.find_by_id(middle.id)).stats.replies == 1
        assert (await comment_repo.find_by_id(leaf.id)).is_active is False
        assert (await comment_repo.find_by_id(sibling.id)).is_active is True
        assert (await project_repo.find_by_id(project.id)).stats.comments == 2

    @pytest.mark.asyncio
    async def test_delete_under_tombstoned_parent_keeps_its_count(self, unit_env):
        """A tombstoned parent's reply count is not decremented again."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)
        parent = await make_comment(comment_repo, project, user, is_active=False)
        child = await make_comment(comment_repo, project, user, parent=parent)
        await comment_repo.set_counter(parent.id, CounterName.REPLIES, 1)
        await project_repo.set_counter(project.id, CounterName.COMMENTS, 1)

        # Act
        result = await comment_service.delete_comment(user.id, child.id)

        # Assert
        assert result.tombstoned == 1
        assert (await comment_repo.find_by_id(parent.id)).stats.replies == 1
        assert (await project_repo.find_by_id(project.id)).stats.comments == 0

    @pytest.mark.asyncio
    async def test_cascade_reaches_every_depth(self, unit_env):
        """No active descendant survives a delete, however deep or wide."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        root = await comment_service.create_comment(user.id, project.id, "root")
        frontier = [root]
        descendants = []
        for depth in range(1, 6):
            next_frontier = []
            for parent in frontier:
                for i in range(2):
                    child = await comment_service.create_comment(
                        user.id, project.id, f"{depth}.{i}", parent_id=parent.id
                    )
                    next_frontier.append(child)
            descendants.extend(next_frontier)
            frontier = next_frontier[:2]

        # Act
        result = await comment_service.delete_comment(user.id, root.id)

        # Assert
        assert result.tombstoned == len(descendants) + 1
        for descendant in descendants:
            assert (await comment_repo.find_by_id(descendant.id)).is_active is False

    @pytest.mark.asyncio
    async def test_repeat_delete_completes_partial_cascade(self, unit_env):
        """A delete that stopped midway is finished by deleting again."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)

        # Root and middle tombstoned, leaves still active
        root = await make_comment(comment_repo, project, user, is_active=False)
        middle = await make_comment(
            comment_repo, project, user, parent=root, is_active=False
        )
        leaf_a = await make_comment(comment_repo, project, user, parent=middle)
        leaf_b = await make_comment(comment_repo, project, user, parent=root)
        await project_repo.set_counter(project.id, CounterName.COMMENTS, 2)

        # Act
        result = await comment_service.delete_comment(user.id, root.id)

        # Assert
        assert result.tombstoned == 2
        assert (await comment_repo.find_by_id(leaf_a.id)).is_active is False
        assert (await comment_repo.find_by_id(leaf_b.id)).is_active is False
        assert (await project_repo.find_by_id(project.id)).stats.comments == 0

    @pytest.mark.asyncio
    async def test_repeat_delete_is_idempotent(self, unit_env):
        """Deleting twice changes nothing the second time."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        project_repo = await unit_env.get(ProjectRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(project_repo, user)
        parent = await comment_service.create_comment(user.id, project.id, "parent")
        child = await comment_service.create_comment(
            user.id, project.id, "child", parent_id=parent.id
        )
        await comment_service.delete_comment(user.id, child.id)
        first_pass = await comment_repo.find_by_id(child.id)

        # Act
        result = await comment_service.delete_comment(user.id, child.id)

        # Assert
        assert result.tombstoned == 0
        second_pass = await comment_repo.find_by_id(child.id)
        assert second_pass.updated_at == first_pass.updated_at
        assert (await comment_repo.find_by_id(parent.id)).stats.replies == 0
        assert (await project_repo.find_by_id(project.id)).stats.comments == 1

    @pytest.mark.asyncio
    async def test_non_author_without_moderation_forbidden(self, unit_env):
        """Other users need moderation rights to delete."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        author = await make_user(user_repo)
        other = await make_user(user_repo)
        project = await make_project(await unit_env.get(ProjectRepository), author)
        comment = await comment_service.create_comment(author.id, project.id, "Mine")

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await comment_service.delete_comment(other.id, comment.id)

        result = await comment_service.delete_comment(
            other.id, comment.id, is_moderator=True
        )
        assert result.tombstoned == 1

    @pytest.mark.asyncio
    async def test_delete_missing_comment_raises_not_found(self, unit_env):
        """Unknown comments cannot be deleted."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(user.id, user.id)


class TestListComments:
    """Tests for list_comments, iter_comments and list_replies."""

    @pytest.mark.asyncio
    async def test_recent_sort_pages_newest_first(self, unit_env):
        """Top-level comments are paged newest first with paging flags."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        oldest = await make_comment(
            comment_repo, project, user, content="old", age=timedelta(hours=3)
        )
        middle = await make_comment(
            comment_repo, project, user, content="mid", age=timedelta(hours=2)
        )
        newest = await make_comment(
            comment_repo, project, user, content="new", age=timedelta(hours=1)
        )
        await make_comment(comment_repo, project, user, parent=newest)

        # Act
        first = await comment_service.list_comments(project.id, page=1, page_size=2)
        second = await comment_service.list_comments(project.id, page=2, page_size=2)

        # Assert
        assert [c.id for c in first.items] == [newest.id, middle.id]
        assert first.total == 3
        assert first.has_next_page is True
        assert first.has_prev_page is False
        assert first.reply_counts[newest.id] == 1
        assert [c.id for c in second.items] == [oldest.id]
        assert second.has_next_page is False
        assert second.has_prev_page is True

    @pytest.mark.asyncio
    async def test_most_liked_sort(self, unit_env):
        """MOST_LIKED orders by like count."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        toggle_service = await unit_env.get(ToggleService)
        user_repo = await unit_env.get(UserRepository)
        user = await make_user(user_repo)
        fan = await make_user(user_repo)
        project = await make_project(await unit_env.get(ProjectRepository), user)
        quiet = await comment_service.create_comment(user.id, project.id, "quiet")
        popular = await comment_service.create_comment(user.id, project.id, "popular")
        await toggle_service.toggle_like(user.id, quiet.id, TargetType.COMMENT)
        await toggle_service.toggle_like(user.id, popular.id, TargetType.COMMENT)
        await toggle_service.toggle_like(fan.id, popular.id, TargetType.COMMENT)

        # Act
        listing = await comment_service.list_comments(
            project.id, sort=CommentSortOrder.MOST_LIKED
        )

        # Assert
        assert [c.id for c in listing.items] == [popular.id, quiet.id]

    @pytest.mark.asyncio
    async def test_reply_counts_are_live(self, unit_env):
        """Reply counts come from active rows, not stored counters."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        parent = await make_comment(comment_repo, project, user)
        await make_comment(comment_repo, project, user, parent=parent)
        await make_comment(comment_repo, project, user, parent=parent, is_active=False)

        # Act
        listing = await comment_service.list_comments(project.id)

        # Assert
        assert listing.items[0].stats.replies == 0
        assert listing.reply_counts[parent.id] == 1

    @pytest.mark.asyncio
    async def test_page_size_above_maximum_rejected(self, unit_env):
        """Page sizes beyond the configured maximum are invalid."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)

        # Act & Assert
        with pytest.raises(ValidationFailedError):
            await comment_service.list_comments(project.id, page_size=101)
        with pytest.raises(ValidationFailedError):
            await comment_service.list_comments(project.id, page=0)

    @pytest.mark.asyncio
    async def test_iter_comments_walks_all_pages_and_restarts(self, unit_env):
        """The iterator yields every comment and starts over on each call."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        for i in range(5):
            await comment_service.create_comment(user.id, project.id, f"comment {i}")

        # Act
        first_walk = [
            c.id async for c in comment_service.iter_comments(project.id, page_size=2)
        ]
        second_walk = [
            c.id async for c in comment_service.iter_comments(project.id, page_size=2)
        ]

        # Assert
        assert len(first_walk) == 5
        assert len(set(first_walk)) == 5
        assert first_walk == second_walk

    @pytest.mark.asyncio
    async def test_list_replies_oldest_first(self, unit_env):
        """Replies come back in creation order, skipping tombstones."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        parent = await comment_service.create_comment(user.id, project.id, "parent")
        first = await comment_service.create_comment(
            user.id, project.id, "first", parent_id=parent.id
        )
        removed = await comment_service.create_comment(
            user.id, project.id, "removed", parent_id=parent.id
        )
        third = await comment_service.create_comment(
            user.id, project.id, "third", parent_id=parent.id
        )
        await comment_service.delete_comment(user.id, removed.id)

        # Act
        replies = await comment_service.list_replies(parent.id)

        # Assert
        assert [r.id for r in replies] == [first.id, third.id]

    @pytest.mark.asyncio
    async def test_list_replies_of_deleted_comment_raises_not_found(self, unit_env):
        """Replies of a tombstoned comment are not listed."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user = await make_user(await unit_env.get(UserRepository))
        project = await make_project(await unit_env.get(ProjectRepository), user)
        parent = await comment_service.create_comment(user.id, project.id, "parent")
        await comment_service.delete_comment(user.id, parent.id)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await comment_service.list_replies(parent.id)
