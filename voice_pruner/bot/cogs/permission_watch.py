"""
Cog: события, меняющие права в голосовых каналах. Каждое событие discord.py запускает
отдельной задачей; здесь событие превращается в Trigger и передаётся в enforcer.handle.
"""
import discord
from discord.ext import commands

from voice_pruner.engine import enforcer
from voice_pruner.engine.triggers import (
    ChannelOverwritesChanged,
    MemberRolesChanged,
    RoleDeleted,
    RolePermissionsChanged,
)


class PermissionWatch(commands.Cog):
    """Автоматическое отключение после изменения overwrites, ролей участника или прав ролей."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_guild_channel_update(
        self,
        before: discord.abc.GuildChannel,
        after: discord.abc.GuildChannel,
    ) -> None:
        trigger = ChannelOverwritesChanged.from_update(before, after)
        await enforcer.handle(after.guild, trigger)

    @commands.Cog.listener()
    async def on_member_update(self, before: discord.Member, after: discord.Member) -> None:
        await enforcer.handle(after.guild, MemberRolesChanged.from_member(after))

    @commands.Cog.listener()
    async def on_guild_role_update(self, before: discord.Role, after: discord.Role) -> None:
        trigger = RolePermissionsChanged.from_update(before, after)
        await enforcer.handle(after.guild, trigger)

    @commands.Cog.listener()
    async def on_guild_role_delete(self, role: discord.Role) -> None:
        await enforcer.handle(role.guild, RoleDeleted.from_role(role))


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(PermissionWatch(bot))
