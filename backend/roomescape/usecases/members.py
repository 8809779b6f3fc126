import logging

from ..domain.errors import AuthenticationError, MemberDuplicatedError, MemberNotFoundError
from ..domain.repositories import MemberRepository
from ..models import Member, Role
from ..utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


async def signup(
    member_repo: MemberRepository,
    *,
    email: str,
    password: str,
    name: str,
    role: Role = Role.USER,
) -> Member:
    if await member_repo.find_by_email(email) is not None:
        raise MemberDuplicatedError(f"member {email} already exists")
    member = Member(email=email, password_hash=hash_password(password), name=name, role=role)
    return await member_repo.save(member)


async def login(member_repo: MemberRepository, *, email: str, password: str) -> Member:
    member = await member_repo.find_by_email(email)
    if member is None or not verify_password(password, member.password_hash):
        logger.info("login rejected for %s", email)
        raise AuthenticationError("email or password is incorrect")
    return member


async def get_member(member_repo: MemberRepository, *, member_id: int) -> Member:
    member = await member_repo.find_by_id(member_id)
    if member is None:
        raise MemberNotFoundError(f"member {member_id} does not exist")
    return member
