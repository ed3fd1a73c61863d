"""Text rendering for tool responses."""

from typing import Any, Iterable, Optional, Sequence

from models import VideoRecord
from utils import extract_youtube_id

EMBED_TEMPLATE = (
    '<iframe width="560" height="315" '
    'src="https://www.youtube.com/embed/{video_id}" frameborder="0" '
    'allow="accelerometer; autoplay; clipboard-write; encrypted-media; '
    'gyroscope; picture-in-picture" allowfullscreen></iframe>'
)
MORE_PROMPT = "Want to see more? Just ask!"


# ══════════════════════════════════════════════════════════════════════════════
# Videos
# ══════════════════════════════════════════════════════════════════════════════


def format_video_results(query: str, videos: Sequence[VideoRecord]) -> str:
    """Markdown block with an embedded player per video."""
    if not videos:
        return f"No videos found for '{query}'. Try a player, opponent or season."

    blocks = []
    for video in videos:
        title = video.title or "OU Video"
        video_id = extract_youtube_id(video.url)

        lines = [f"**{title}**", ""]
        if video_id:
            lines.append(EMBED_TEMPLATE.format(video_id=video_id))
        elif video.url:
            lines.append(video.url)
        if video.description:
            lines.extend(["", f"*{video.description}*"])
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks) + f"\n\n{MORE_PROMPT}"


def video_to_dict(video: VideoRecord) -> dict[str, Any]:
    data = video.model_dump()
    data["video_id"] = extract_youtube_id(video.url)
    return data


# ══════════════════════════════════════════════════════════════════════════════
# ESPN
# ══════════════════════════════════════════════════════════════════════════════


def find_team_game(
    games: Iterable[dict[str, Any]], team: str
) -> Optional[dict[str, Any]]:
    """First game where either side's name contains ``team``."""
    needle = team.lower()
    for game in games:
        if needle in game["home"].lower() or needle in game["away"].lower():
            return game
    return None


def format_score(games: Sequence[dict[str, Any]], team: str) -> str:
    if not games:
        return "No games found."
    game = find_team_game(games, team)
    if game is None:
        return f"No recent game found for {team}."
    return (
        f"{game['away']} {game['away_score']}, "
        f"{game['home']} {game['home_score']} - {game['status']}"
    )


def format_scoreboard(
    games: Sequence[dict[str, Any]],
    title: str,
    limit: int,
    include_status: bool = True,
) -> str:
    if not games:
        return "No games found."

    lines = [f"📊 {title}:", ""]
    for game in games[:limit]:
        line = (
            f"{game['away']} {game['away_score']} @ "
            f"{game['home']} {game['home_score']}"
        )
        if include_status and game["status"]:
            line += f" - {game['status']}"
        lines.append(line)
    return "\n".join(lines)


def format_poll(
    polls: dict[str, list[dict[str, Any]]],
    poll_names: Sequence[str],
    heading: str,
) -> str:
    if not polls:
        return "No rankings available."

    ranks = next((polls[name] for name in poll_names if name in polls), None)
    if ranks is None:
        return f"{poll_names[0]} not found."

    lines = [f"🏆 {heading}:", ""]
    for entry in ranks[:25]:
        record = f" ({entry['record']})" if entry["record"] else ""
        lines.append(f"{entry['rank']}. {entry['team']}{record}")
    return "\n".join(lines)


def format_schedule(games: Sequence[dict[str, Any]], team: str) -> str:
    if not games:
        return "No schedule found."

    needle = team.lower()
    lines = [f"📅 {team} Schedule:", ""]
    for game in games:
        opponent = game["away"] if needle in game["home"].lower() else game["home"]
        date = (game["date"] or "TBD")[:10]
        lines.append(f"{date} - vs {opponent}")
    return "\n".join(lines)


# ══════════════════════════════════════════════════════════════════════════════
# CFBD
# ══════════════════════════════════════════════════════════════════════════════


def _na(value: Any) -> Any:
    return "N/A" if value in (None, "") else value


def format_recruiting(rows: Sequence[dict[str, Any]], team: str, year: int) -> str:
    if not rows:
        return "No recruiting data found."
    row = rows[0]
    return (
        f"🎓 {team} {year} Recruiting:\n"
        f"Rank: #{_na(row.get('rank'))}\n"
        f"Points: {_na(row.get('points'))}\n"
        f"Commits: {_na(row.get('commits'))}"
    )


def format_team_stats(rows: Sequence[dict[str, Any]], team: str, year: int) -> str:
    if not rows:
        return "No stats found."
    lines = [f"📈 {team} {year} Stats:", ""]
    for stat in rows[:10]:
        lines.append(f"{stat.get('statName')}: {stat.get('statValue')}")
    return "\n".join(lines)


def format_matchup(data: Optional[dict[str, Any]], team1: str, team2: str) -> str:
    if not data:
        return "No matchup data found."
    return (
        f"🏆 {team1} vs {team2} All-Time:\n"
        f"{team1} Wins: {_na(data.get('team1Wins'))}\n"
        f"{team2} Wins: {_na(data.get('team2Wins'))}\n"
        f"Ties: {_na(data.get('ties'))}"
    )


def format_standings(
    rows: Sequence[dict[str, Any]], conference: str, year: int
) -> str:
    if not rows:
        return "No standings found."
    lines = [f"📊 {conference} Standings {year}:", ""]
    for row in rows[:14]:
        lines.append(
            f"{row.get('team')}: "
            f"{row.get('conference_wins')}-{row.get('conference_losses')} "
            f"({row.get('total_wins')}-{row.get('total_losses')})"
        )
    return "\n".join(lines)


def format_game_results(rows: Sequence[dict[str, Any]], team: str, year: int) -> str:
    if not rows:
        return "No game stats found."
    lines = [f"📈 {team} {year} Game Results:", ""]
    for game in rows[:12]:
        lines.append(
            f"vs {game.get('opponent')}: "
            f"{game.get('points')}-{game.get('opponent_points')}"
        )
    return "\n".join(lines)


def format_plays(rows: Sequence[dict[str, Any]]) -> str:
    if not rows:
        return "No play-by-play data found."
    lines = ["🎮 Play-by-Play (showing first 10 plays):", ""]
    for play in rows[:10]:
        lines.append(
            f"Q{play.get('period')} - {play.get('clock')}: {play.get('play_text')}"
        )
    return "\n".join(lines)


def format_player_stats(
    rows: Sequence[dict[str, Any]], player: str, year: int
) -> str:
    if not rows:
        return f"No stats found for {player} in {year}."

    needle = player.lower()
    matches = [row for row in rows if needle in str(row.get("player") or "").lower()]
    if not matches:
        return f"Player {player} not found."

    lines = [f"📈 {matches[0].get('player')} ({year}):"]
    for row in matches:
        label = " ".join(
            str(part) for part in (row.get("category"), row.get("statType")) if part
        )
        lines.append(f"{label or 'Stat'}: {_na(row.get('stat'))}")
    return "\n".join(lines)


def format_team_rankings(rows: Sequence[dict[str, Any]], team: str, year: int) -> str:
    if not rows:
        return "No ranking data found."
    lines = [f"📊 {team} {year} Rankings History:", ""]
    for week in rows[:15]:
        lines.append(f"Week {week.get('week')}: AP #{week.get('rank') or 'NR'}")
    return "\n".join(lines)


def format_team_records(
    rows: Sequence[dict[str, Any]], team: str, start_year: int, end_year: int
) -> str:
    if not rows:
        return "No records found."

    wins = sum((row.get("total") or {}).get("wins", 0) for row in rows)
    losses = sum((row.get("total") or {}).get("losses", 0) for row in rows)
    games = wins + losses
    pct = f"{wins / games * 100:.1f}%" if games else "N/A"
    return (
        f"🏆 {team} Records ({start_year}-{end_year}):\n"
        f"Total Wins: {wins}\n"
        f"Total Losses: {losses}\n"
        f"Win %: {pct}"
    )


def format_talent(rows: Sequence[dict[str, Any]], team: str, year: int) -> str:
    if not rows:
        return "No talent data found."
    row = next((r for r in rows if r.get("school") == team), None)
    if row is None:
        return f"No talent data for {team}."
    return (
        f"⭐ {team} {year} Talent Composite:\n"
        f"Rank: #{_na(row.get('rank'))}\n"
        f"Talent Score: {_na(row.get('talent'))}"
    )


def format_venue(rows: Sequence[dict[str, Any]], venue: str) -> str:
    if not rows:
        return "No venue data found."

    needle = venue.lower()
    row = next((r for r in rows if needle in str(r.get("name") or "").lower()), None)
    if row is None:
        return f"Venue {venue} not found."

    capacity = row.get("capacity")
    capacity = f"{capacity:,}" if isinstance(capacity, int) else _na(capacity)
    return (
        f"🏟️ {row.get('name')}:\n"
        f"Location: {row.get('city')}, {row.get('state')}\n"
        f"Capacity: {capacity}\n"
        f"Year Built: {_na(row.get('year_constructed'))}"
    )
